from setuptools import setup, find_packages
from pathlib import Path

readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Runtime value validation with composable, immutable schemas, structured path-addressed issues and localized messages."

setup(
    name="vld",
    version="0.1.0",
    description="Runtime value validation with composable, immutable schemas",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"vld": ["locales/*.yaml"]},
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",  # Issue model and settings
        "pyyaml>=6.0",  # Message tables and declarative schemas
        "jinja2>=3.0",  # Message templates
        "typer>=0.9.0",  # CLI
    ],
    entry_points={
        "console_scripts": [
            "vld=vld.cli:main",
        ],
    },
    extras_require={
        "dev": [
            "pytest",
            "coverage",
            "hypothesis",
            "parameterized==0.9.0",
        ],
    },
)
