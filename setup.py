from setuptools import setup, find_packages

setup(
    name="termline",
    version="0.1.0",
    description="A terminal client for remote interactive programs",
    packages=find_packages(include=["termline", "termline.*"]),
    install_requires=[
        "httpx",
        "rich",
        "prompt-toolkit",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "termline=termline.cli:main",
        ],
    },
    python_requires=">=3.11",
)
