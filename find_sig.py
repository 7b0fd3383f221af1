'''find_sig 스크립트 래퍼(KR). find_sig script wrapper (EN).'''

from __future__ import annotations

import sys

from cli.find_sig import main

__all__ = ['main']


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
