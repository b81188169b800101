"""Setup script for the SEO Metrics & Forecasting Engine."""

from setuptools import setup, find_packages

setup(
    name="seo-metrics-engine",
    version="1.0.0",
    description="Search-volume trend analysis, forecasting and keyword opportunity scoring",
    author="Common Notary Apostille",
    packages=find_packages(exclude=("tests", "tests.*")),
    include_package_data=True,
    install_requires=[
        "click>=8.1.0",
        "rich>=13.6.0",
        "loguru>=0.7.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "seo-metrics=seo_metrics.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
