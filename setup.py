from setuptools import setup, find_packages

setup(
    name="feedpulse",
    version="0.1.0",
    description="FeedPulse - reading recommendations and statistics for RSS articles",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "beautifulsoup4>=4.10.0",
        "tqdm>=4.62.0",
        "mistune>=2.0.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "feedpulse=feedpulse.cli:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
