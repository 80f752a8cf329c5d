from setuptools import setup, find_packages

setup(
    name="gapi-client",
    version="0.1.0",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={"gapi_client": ["apis/*/*.yaml"]},
    install_requires=[
        "pyyaml>=6.0",
        "pydantic>=2.6",
        "requests>=2.28",
        "typer>=0.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["gapi=gapi_client.cli:main"],
    },
    author="Your Name",
    author_email="your.email@example.com",
    description="Client for Google REST APIs (App State, DoubleClick Search, TaskQueue, Tasks)",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/gapi-client",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
)
