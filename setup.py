# setup.py
from setuptools import setup, find_packages

setup(
    name="xtiloger",
    version="1.0.0",
    description="Leveled, file-backed logging with date-bucketed rotation files",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Encuentra automáticamente el paquete 'xtiloger'
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Topic :: System :: Logging",
    ],
)
