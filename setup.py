""" koblitz build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import koblitz

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=koblitz.name,
    version=koblitz.__version__,
    url="https://github.com/koblitz-dev/koblitz",
    project_urls={
        "GitHub": "https://github.com/koblitz-dev/koblitz",
        "Issues": "https://github.com/koblitz-dev/koblitz/issues",
    },
    license=koblitz.__license__,
    author=koblitz.__author__,
    author_email=koblitz.__author_email__,
    description="Koblitz curve elliptic curve cryptography",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["dataclasses_json", "pycryptodome"],
    extras_require={"test": ["pytest", "coincurve"]},
    keywords=(
        "cryptography elliptic-curves koblitz secp256k1 secp192k1 ecdsa "
        "der pem wif base58 sin montgomery-ladder"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
