"""
Test that the dependency layering rule is enforced:
  ttsbot/services, ttsbot/utils, ttsbot/models and ttsbot/domain must
  NEVER import from ttsbot/bot/.

The option model, store and TTS client have to stay usable without
discord.py, so only the bot layer may reach into it.
"""

import ast
import os
from pathlib import Path

PACKAGE_ROOT = Path(__file__).parent.parent / "ttsbot"

# Directories that must not import from ttsbot.bot
LOWER_LAYERS = ["domain", "models", "services", "utils", "infrastructure"]

# Directories that must not import discord at all
DISCORD_FREE_LAYERS = ["domain", "models", "services", "infrastructure"]


def _collect_imports(filepath: Path) -> list[tuple[int, str, int]]:
    """Parse a Python file and return (line_number, module_string, level) for all imports."""
    source = filepath.read_text(encoding="utf-8")
    tree = ast.parse(source, filename=str(filepath))

    results = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name, 0))
        elif isinstance(node, ast.ImportFrom):
            results.append((node.lineno, node.module or "", node.level or 0))
    return results


def _resolve_import(filepath: Path, module: str, level: int) -> str:
    """Resolve an import to its absolute dotted form.

    level=1 (.X) is the file's own package, level=2 (..X) its parent, and so on.
    """
    if level == 0:
        return module

    package_dir = filepath.parent
    for _ in range(level - 1):
        package_dir = package_dir.parent

    relative_to_root = package_dir.relative_to(PACKAGE_ROOT.parent)
    base_str = str(relative_to_root).replace(os.sep, ".")
    if module:
        return f"{base_str}.{module}"
    return base_str


def _find_imports_in_layer(layer: str, prefix: str) -> list[str]:
    violations = []
    layer_dir = PACKAGE_ROOT / layer

    for py_file in layer_dir.rglob("*.py"):
        rel_path = str(py_file.relative_to(PACKAGE_ROOT))
        for lineno, module, level in _collect_imports(py_file):
            resolved = _resolve_import(py_file, module, level)
            if resolved == prefix or resolved.startswith(prefix + "."):
                violations.append(
                    f"{rel_path}:{lineno} imports {module} (resolves to {resolved})"
                )
    return violations


class TestNoReversedDependencies:
    """Verify lower layers never import from bot/."""

    def test_layers_exist(self):
        for layer in LOWER_LAYERS:
            assert (PACKAGE_ROOT / layer).is_dir(), layer

    def test_lower_layers_do_not_import_bot(self):
        violations = []
        for layer in LOWER_LAYERS:
            violations.extend(_find_imports_in_layer(layer, "ttsbot.bot"))
        assert violations == [], "reversed imports from bot/:\n" + "\n".join(
            f"  - {v}" for v in violations
        )

    def test_core_layers_do_not_import_discord(self):
        violations = []
        for layer in DISCORD_FREE_LAYERS:
            violations.extend(_find_imports_in_layer(layer, "discord"))
        assert violations == [], "discord imported outside bot/:\n" + "\n".join(
            f"  - {v}" for v in violations
        )
