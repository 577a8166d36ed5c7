"""Shared fixtures for svgvault tests."""

from pathlib import Path
import pytest
from loguru import logger


def build_svg(paths=0, fills=(), strokes=(), width="24", height="24", view_box="0 0 24 24"):
    """SVG markup with exactly `paths` path elements and the given literal colors."""
    attrs = ['xmlns="http://www.w3.org/2000/svg"']
    if width is not None:
        attrs.append(f'width="{width}"')
    if height is not None:
        attrs.append(f'height="{height}"')
    if view_box is not None:
        attrs.append(f'viewBox="{view_box}"')

    body = [f'  <g fill="{color}"></g>' for color in fills]
    body += [f'  <line x1="0" y1="0" x2="1" y2="1" stroke="{color}"/>' for color in strokes]
    body += ['  <path d="M0 0h1v1z"/>'] * paths

    return "<svg " + " ".join(attrs) + ">\n" + "\n".join(body) + "\n</svg>\n"


@pytest.fixture(autouse=True)
def quiet_logger():
    """Drop sinks added during a test so none outlive its captured streams."""
    yield
    logger.remove()


@pytest.fixture
def svg():
    return build_svg


@pytest.fixture
def vault(tmp_path):
    """Empty vault root."""
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture
def write_svg(vault):
    """Write markup to a vault-relative path, creating folders as needed."""
    def _write(rel_path: str, content: str) -> Path:
        target = vault / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target
    return _write


@pytest.fixture
def sample_vault(vault, write_svg, svg):
    """
    Small vault:

        star-icon.svg               1 path, fill #FF0000
        space/stars/comet.svg       3 paths, fill #00ff00, stroke #000
        misc/moon.svg               7 paths, fill starlight (custom name)
        misc/sun.svg                0 paths, no colors
        notes.txt                   ignored
    """
    write_svg("star-icon.svg", svg(paths=1, fills=["#FF0000"]))
    write_svg("space/stars/comet.svg", svg(paths=3, fills=["#00ff00"], strokes=["#000"]))
    write_svg("misc/moon.svg", svg(paths=7, fills=["starlight"]))
    write_svg("misc/sun.svg", svg(paths=0))
    (vault / "notes.txt").write_text("not an asset")
    return vault
