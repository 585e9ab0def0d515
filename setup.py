from setuptools import setup, find_packages

setup(
    name="bond_valuation_engine",
    version="0.1.0",
    description="Fixed-rate bond YTM, duration and ISIN validation engine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy",
        ],
    },
    python_requires=">=3.8",
)
