from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="icwl",
    version="0.1.0",
    description="Irrigation channel water loss model",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["icwl", "icwl.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.10',
    install_requires=[
        "pandas",
        "numpy",
        "matplotlib",
        "seaborn",
        "dynaconf",
        "pyyaml",
        "pint",
        "joblib",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "icwl=icwl.main:main",
        ],
    },
)
