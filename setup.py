from setuptools import setup, find_packages

setup(
    name="seo_scorer",
    version="1.0.0",
    packages=find_packages(where=".", exclude=["tests", "tests.*"]),
    package_dir={"": "."},
    install_requires=[
        "fastapi",
        "uvicorn",
        "python-dotenv",
        "httpx",
        "parsel",
        "pydantic>=2"
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio"
        ]
    }
)