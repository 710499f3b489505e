# type: ignore
from typing import List  # noqa
from typing import Tuple  # noqa

from riot import Venv


latest = ""


SUPPORTED_PYTHON_VERSIONS: List[Tuple[int, int]] = [
    (3, 9),
    (3, 10),
    (3, 11),
    (3, 12),
    (3, 13),
]  # type: List[Tuple[int, int]]


def version_to_str(version: Tuple[int, int]) -> str:
    """Convert a Python version tuple to a string

    >>> version_to_str((3, 9))
    '3.9'
    >>> version_to_str((3, 10))
    '3.10'
    >>> version_to_str((3, ))
    '3'
    """
    return ".".join(str(p) for p in version)


def str_to_version(version: str) -> Tuple[int, int]:
    """Convert a Python version string to a tuple

    >>> str_to_version("3.9")
    (3, 9)
    >>> str_to_version("3.10")
    (3, 10)
    >>> str_to_version("3")
    (3,)
    """
    return tuple(int(p) for p in version.split("."))


MIN_PYTHON_VERSION = version_to_str(min(SUPPORTED_PYTHON_VERSIONS))
MAX_PYTHON_VERSION = version_to_str(max(SUPPORTED_PYTHON_VERSIONS))


def select_pys(min_version: str = MIN_PYTHON_VERSION, max_version: str = MAX_PYTHON_VERSION) -> List[str]:
    """Helper to select python versions from the list of versions we support

    >>> select_pys()
    ['3.9', '3.10', '3.11', '3.12', '3.13']
    >>> select_pys(max_version='3')
    []
    >>> select_pys(min_version='3.9', max_version='3.10')
    ['3.9', '3.10']
    """
    min_version = str_to_version(min_version)
    max_version = str_to_version(max_version)

    return [version_to_str(version) for version in SUPPORTED_PYTHON_VERSIONS if min_version <= version <= max_version]


venv = Venv(
    pkgs={
        "mock": latest,
        "pytest": latest,
        "pytest-mock": latest,
        "coverage": latest,
        "pytest-cov": latest,
        "hypothesis": latest,
    },
    env={
        "SQLTRACELOG_LOGGING_RATE": "0",
    },
    venvs=[
        Venv(
            name="sqltracelog",
            pys=select_pys(),
            command="pytest {cmdargs} tests/",
            venvs=[
                Venv(pkgs={"wrapt": ["~=1.14", latest], "envier": latest, "attrs": latest}),
            ],
        ),
        Venv(
            name="doctests",
            pys=["3"],
            command="pytest --doctest-modules {cmdargs} sqltracelog/ riotfile.py",
        ),
        Venv(
            name="flake8",
            pys=["3"],
            command="flake8 {cmdargs} sqltracelog/ tests/",
            pkgs={
                "flake8": latest,
                "flake8-isort": latest,
            },
        ),
    ],
)
