# setup.py
from setuptools import setup, find_packages

setup(
    name="sitemap_tally",
    version="0.1.0",
    description="Concurrent sitemap crawler that counts or pattern-matches discovered URLs",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"sitemap_tally": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["sitemap-tally=sitemap_tally.cli:cli"],
    },
    python_requires=">=3.11",
)
