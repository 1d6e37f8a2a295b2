# setup.py
from setuptools import setup, find_packages

setup(
    name="shortcut_site",
    version="0.1.0",
    description="Static website generator for Shortcut objectives, epics and stories",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"shortcut_site": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.2",
        "Jinja2>=3.1",
        "Markdown>=3.5",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "beautifulsoup4>=4.12",
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "shortcut-site=shortcut_site.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
