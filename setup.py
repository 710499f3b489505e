from pathlib import Path

from setuptools import find_packages, setup  # isort: skip


HERE = Path(__file__).resolve().parent


def get_long_description():
    with open(HERE / "README.md", encoding="utf-8") as f:
        return f.read()


setup(
    name="sqltracelog",
    version="0.1.0",
    description="Structured logging of database driver trace events",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests*"]),
    package_data={
        "sqltracelog": ["py.typed"],
    },
    python_requires=">=3.9",
    install_requires=[
        "attrs>=20",
        "envier>=0.5",
        "wrapt>=1.14",
    ],
    extras_require={
        "testing": [
            "hypothesis",
            "mock",
            "pytest",
            "pytest-mock",
            "riot",
        ],
    },
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: System :: Logging",
        "Topic :: Database",
    ],
)
