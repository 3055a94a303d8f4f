from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="amm-broker",
    version="0.1.0",
    author="Your Name",
    description="Swap-to-price brokers and deployment glue for Uniswap V2/V3 test environments",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "results", "venv"]),
    package_data={
        "amm_broker": ["abis.json"],
        "amm_broker.protocols.uniswap_v2": ["abis.json"],
        "amm_broker.protocols.uniswap_v3": ["abis.json"],
    },
    python_requires=">=3.8",
    install_requires=[
        "web3>=7.0.0",
        "python-dotenv>=1.0.0",
        "mnemonic>=0.20",
        "eth-account>=0.13.0",
        "eth-abi>=4.0.0",
        "structlog>=23.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "amm-broker=amm_broker.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
