from pathlib import Path
from setuptools import setup, find_packages

DIR = Path(__file__).parent
NAME = "nesnorm"
VERSION = (DIR / "VERSION").read_text().strip()
AUTHOR = "Hamish M. Blair"
EMAIL = "hmblair@stanford.edu"
URL = "https://github.com/hmblair/nesnorm"
LICENSE = "MIT"

setup(
    name=NAME,
    version=VERSION,
    author=AUTHOR,
    author_email=EMAIL,
    url=URL,
    license=LICENSE,
    python_requires=">=3.9",
    package_dir={"": "src/python"},
    packages=find_packages(where="src/python"),
    install_requires=[
        "numpy",
        "dask[array]",
        "h5py",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
