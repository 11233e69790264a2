from pathlib import Path

here = Path(__file__).parent
with open(here.parent / "VERSION.txt", "r") as vf:
    __version__ = vf.read().strip()

# the container must exist before any module that injects from it is imported
from . import core  # noqa: E402, F401
