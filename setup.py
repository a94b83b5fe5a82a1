from setuptools import setup, find_packages

setup(
    name="clear_night_sky",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "google-adk",
        "aiohttp>=3.8.0",
        "mcp>=1.10.0,<2",
        "pydantic>=2.0",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "clear-sky-mcp=clear_sky_mcp.clear_sky_tool.clear_sky_server:main",
            "clear-sky-hourly=clear_sky_mcp.clear_sky_tool.hourly_cli:main",
        ],
    },
    python_requires=">=3.10",
)
