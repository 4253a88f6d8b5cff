"""
Shared test fixtures and path constants for axon-parser tests.

All input file paths are defined here as module-level constants for
easy discovery and modification. If input files move or new ones are
added, update this file.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Input file paths -- edit here if files move or new ones are added
# ---------------------------------------------------------------------------
INPUT_DIR = Path(__file__).resolve().parent.parent / "inputs"

USERS_AXON = INPUT_DIR / "users.axon"

# ---------------------------------------------------------------------------
# Shared documents
# ---------------------------------------------------------------------------
USER_DOCUMENT = """\
@schema User
id:I
name:S
email:S
active:B
age:I?
@end

@data User[3]
1|Alice|alice@example.com|1|28
2|Bob|bob@example.com|0|_
3|Carol|carol@example.com|1|35
@end
"""


@pytest.fixture()
def user_document() -> str:
    """The worked User example: 1 schema, 1 data block, 3 rows."""
    return USER_DOCUMENT


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs against input files)",
    )
