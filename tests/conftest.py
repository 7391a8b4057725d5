"""Shared test fixtures — sample secrets and temporary source trees."""

from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

from vibesafe.config.schema import VibeSafeConfig
from vibesafe.rules.registry import RuleRegistry, build_registry

from secret_samples import AWS_ACCESS_KEY, HIGH_ENTROPY_RUN


@pytest.fixture
def registry() -> RuleRegistry:
    return build_registry(VibeSafeConfig())


@pytest.fixture
def make_tree(tmp_path: Path):
    """Write ``{relative_path: content}`` under *tmp_path* and return the root."""

    def _make(files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            p = tmp_path / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def leaky_tree(make_tree) -> Path:
    """A small project with one secret per interesting location."""
    return make_tree({
        "src/config.py": f'AWS_KEY = "{AWS_ACCESS_KEY}"\nDEBUG = True\n',
        "src/util.py": "def add(a, b):\n    return a + b\n",
        "node_modules/pkg/index.js": f'const key = "{AWS_ACCESS_KEY}";\n',
        ".git/config": f"token = {HIGH_ENTROPY_RUN}\n",
        ".env": f"AWS_KEY={AWS_ACCESS_KEY}\n",
    })
