import sys
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parent / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from auth5.cli import main  # noqa: E402


if __name__ == '__main__':
    sys.exit(main())
