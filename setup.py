from setuptools import setup, find_packages
import os

# Read requirements from requirements.txt
requirements_path = os.path.join(os.path.dirname(__file__), "requirements.txt")
try:
    with open(requirements_path, "r", encoding="utf-8") as f:
        requirements = []
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                # Remove inline comments
                req = line.split("#")[0].strip()
                if req:
                    requirements.append(req)
except FileNotFoundError:
    requirements = [
        "typer>=0.9.0",
        "rich>=13.5.2",
        "python-dotenv>=1.0.0",
        "python-dateutil>=2.8.2",
        "dateparser>=1.1.0",
        "pydantic>=2.0.0",
    ]

setup(
    name="todotree",
    version="1.0.0",
    author="todotree developers",
    description="Command-line nested todo lists with due/late deadlines and derived parent status",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business :: Scheduling",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Environment :: Console",
        "Natural Language :: English",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.1.3",
        ],
        "dev": [
            "pytest>=7.1.3",
            "pytest-mock>=3.10.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todotree=todotree.cli:app",
        ],
    },
    keywords="todo productivity task-management cli deadlines",
    zip_safe=False,
)
