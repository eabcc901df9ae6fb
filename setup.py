from setuptools import setup, find_packages

setup(
    name="moderia-marketplace",
    version="0.1.0",
    packages=find_packages(include=["moderia", "moderia.*"]),
    python_requires=">=3.9",
    install_requires=[
        "python-dotenv>=1.0.0",
        "aiohttp>=3.9.0",
        "eth-account>=0.10.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "langchain-core>=0.3.0",
        "langchain-openai>=0.2.0",
        "langgraph>=0.3.0",
    ],
    extras_require={
        "vault": [
            "secretvaults>=0.0.0a10,<0.1",
        ],
        "test": [
            "pytest>=7.0.0",
        ],
    },
)
