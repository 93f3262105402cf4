import pytest

from lead_engine import __version__
from main import banner


@pytest.mark.parametrize("host, port", [
    ("0.0.0.0", 8000),
    ("localhost", 80),
    ("leads-api.internal.example.com", 65535),
])
def test_banner_rows_line_up(host, port):
    rows = banner(host, port).splitlines()

    assert len({len(row) for row in rows}) == 1
    assert all(row[-1] in "╗║╣╝" for row in rows)
    assert f"http://{host}:{port}/docs" in rows[5]


def test_banner_shows_package_version():
    assert f"Version {__version__}" in banner("0.0.0.0", 8000)
