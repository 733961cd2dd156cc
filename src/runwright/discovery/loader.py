"""Load test modules and build their registration table."""

import hashlib
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from runwright.discovery.registry import Registry
from runwright.errors import MetadataError

log = logging.getLogger(__name__)


class ModuleLoader:
    """Imports a test module by file path or dotted name."""

    def __init__(self, target: Path | str):
        """Initialize the loader.

        Args:
            target: Path to a ``.py`` file or a dotted module name
        """
        self.target = str(target)

    @property
    def is_path(self) -> bool:
        return self.target.endswith(".py") or Path(self.target).exists()

    def load_module(self) -> ModuleType:
        """Import the target module.

        Raises:
            MetadataError: If the module cannot be found or fails to import
        """
        if self.is_path:
            return self._load_from_path(Path(self.target))

        try:
            return importlib.import_module(self.target)
        except Exception as e:
            raise MetadataError(f"Cannot import test module '{self.target}': {e}") from e

    def load(self) -> Registry:
        """Import the target and collect its test cases and fixtures.

        Raises:
            MetadataError: If the module cannot be loaded or enumerated
        """
        module = self.load_module()
        try:
            registry = Registry.from_module(module)
        except (TypeError, ValueError) as e:
            raise MetadataError(f"Invalid declarations in '{self.target}': {e}") from e

        log.info(
            "Discovered %d test case(s) and %d fixture(s) in %s",
            len(registry.test_cases()),
            len(registry.fixtures()),
            module.__name__,
        )
        return registry

    def _load_from_path(self, path: Path) -> ModuleType:
        path = path.resolve()
        if not path.is_file():
            raise MetadataError(f"Test module not found: {path}")

        module_name = module_name_for(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise MetadataError(f"Cannot load test module from {path}")

        # Siblings are importable only while the module body executes
        directory = str(path.parent)
        added_to_path = directory not in sys.path
        if added_to_path:
            sys.path.insert(0, directory)

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise MetadataError(f"Error loading test module {path}: {e}") from e
        finally:
            if added_to_path and directory in sys.path:
                sys.path.remove(directory)

        return module


def module_name_for(path: Path) -> str:
    """Import name for a test file, unique per resolved path.

    Reloading the same file reuses its entry in ``sys.modules``; two files
    sharing a stem in different directories never replace each other.
    """
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    return f"runwright_suite_{path.stem}_{digest}"


def load_registry(target: Path | str) -> Registry:
    """Load a test module and return its registry."""
    return ModuleLoader(target).load()
