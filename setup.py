from setuptools import setup, find_packages

setup(
    name="jscore",
    version="0.1.0",
    description="jscore - embedded script lexer, parser and tree-walking evaluator",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="jscore Project",
    python_requires=">=3.9",
    packages=find_packages(),
    entry_points={
        "console_scripts": [
            "jscore=jscore.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Interpreters",
    ],
)
