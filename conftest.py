'''KR: 스캔 테스트 트리 픽스처. EN: Pytest scan tree fixtures.'''

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixtures.virtual_fs import (
    SIGNATURE,
    clean_elf,
    create_binary_tree,
    elf_with_cross_boundary_signature,
    elf_with_partial_signature,
    elf_with_signature_at_end,
    elf_with_signature_at_start,
    infected_elf,
)

BUFFER_SIZE = 4096


@pytest.fixture
def signature_file(tmp_path: Path) -> Path:
    '''시그니처 파일을 만든다(KR). Write the signature file (EN).'''

    path = tmp_path / 'sig.sig'
    path.write_bytes(SIGNATURE)
    return path


@pytest.fixture
def elf_tree(tmp_path: Path) -> Path:
    '''감염/정상/경계 사례 트리를 구성한다(KR). Build the infected/clean/edge tree (EN).'''

    base = tmp_path / 'tree'
    create_binary_tree(
        base,
        {
            'clean/clean1': clean_elf(),
            'infected/inf1': infected_elf(),
            'infected/inf2': elf_with_signature_at_end(),
            'infected/inf3': elf_with_signature_at_start(),
            'infected/inf4': elf_with_cross_boundary_signature(BUFFER_SIZE),
            'falsepositive/partial': elf_with_partial_signature(),
            'falsepositive/text.txt': b'NOT_ELF\n',
            'edgecases/empty': b'',
            'edgecases/not_elf_sig.txt': SIGNATURE,
        },
    )
    # 심볼릭 링크는 기본적으로 건너뛴다
    (base / 'edgecases' / 'symlink').symlink_to(base / 'infected' / 'inf1')
    return base


@pytest.fixture
def expected_infected(elf_tree: Path) -> set[str]:
    '''감염으로 보고될 경로(KR). Paths that must be reported infected (EN).'''

    return {str(elf_tree / 'infected' / name) for name in ('inf1', 'inf2', 'inf3', 'inf4')}
