from __future__ import annotations

import asyncio

from docoutline.cli import parse_args, run


def main() -> None:
    asyncio.run(run(parse_args()))


if __name__ == "__main__":
    main()
