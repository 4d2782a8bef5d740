from setuptools import setup, find_packages

setup(
    name="mono-cli",
    version="1.0.0",
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        "typer<0.26",
        "click",
        "GitPython",
        "python-dotenv",
        "PyYAML",
        "packaging",
        "rich",
        "typing_extensions",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mono=monocli.cli.main:main",
        ],
    },
    description="Command-line tool for PHP monorepos driven by Composer and Turborepo",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Environment :: Console",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.12",
)
