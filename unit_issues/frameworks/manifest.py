"""Manifest through which a test framework plugin is registered."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from unit_issues.frameworks.base import TestFramework


@dataclass(frozen=True, kw_only=True)
class FrameworkManifest[ConfigT: BaseModel]:
    """Test framework plugin: its configuration model and session factory.

    Nothing is started until ``open`` is called, so loading a manifest is
    cheap even for frameworks with heavy dependencies.
    """

    config_cls: type[ConfigT]
    framework_factory: Callable[[ConfigT], AbstractAsyncContextManager[TestFramework]]

    def open(self, config_json: str) -> AbstractAsyncContextManager[TestFramework]:
        """Validate the JSON configuration and open a framework session.

        Raises:
            pydantic.ValidationError: If the configuration is invalid

        """
        return self.framework_factory(self.config_cls.model_validate_json(config_json))
