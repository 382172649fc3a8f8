from setuptools import find_packages, setup

setup(
    name="service-kit",
    version="1.0.0",
    description="API bootstrapper and HTTP client utilities for python services",
    author="Service Kit Team",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"service_kit.api": ["static/*.js"]},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        # Web dependencies
        "fastapi>=0.110.0",
        # HTTP client dependencies
        "httpx>=0.25.0",
        # Logging dependencies
        "structlog>=23.2.0",
        "python-json-logger>=2.0.7",
        # Config dependencies
        "pydantic>=2.10.0",
        "pydantic-settings>=2.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.13",
    ],
)
