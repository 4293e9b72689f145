from setuptools import setup, find_packages
from os import path
from io import open

setup_dir = path.abspath(path.dirname(__file__))
with open(path.join(setup_dir, 'README.md'),
          encoding='utf-8') as readme_file:
    long_description = readme_file.read()

setup(
    name="mealy_tools",
    version="0.1",
    packages=find_packages(exclude=["testing", "testing.*"]),
    include_package_data=True,
    package_data={
        "mealy_tools.automata": ["builtin/*.dot"]
    },
    python_requires=">=3.9",

    install_requires=[
        "numpy>=1.22",
        "scipy"
    ],
    extras_require={
        "test": ["pytest"]
    },

    description="""Some tools for working with Mealy machines learned from
    black-box testing: shortest transition routes and .dot file I/O""",

    long_description=long_description,
    long_description_content_type="text/markdown"
)
