"""
Processor loader.

Resolves a processor name to its class at invocation time. Names registered
explicitly at process start win; anything else is imported by convention
from ``<package>.<name>.src.main``, whose ``processor`` attribute is the class.
"""

import importlib
import logging
from typing import Callable, Dict, Optional

from faas.runtime.config import config
from faas.runtime.core.context import Context
from faas.runtime.core.exceptions import ProcessorLoadError, ProcessorNotFoundError
from faas.runtime.core.lifecycle import BaseProcessor

logger = logging.getLogger("faas.loader")

ProcessorFactory = Callable[[Context], BaseProcessor]

PROCESSOR_ATTRIBUTE = "processor"


class ProcessorLoader:
    def __init__(
        self,
        package: str = "processor",
        registry: Optional[Dict[str, ProcessorFactory]] = None,
    ):
        self.package = package
        self._registry: Dict[str, ProcessorFactory] = dict(registry or {})

    def module_path(self, processor_name: str) -> str:
        return f"{self.package}.{processor_name}.src.main"

    def register(self, processor_name: str, factory: Optional[ProcessorFactory] = None):
        """
        Register a processor under a name.

        Usable directly or as a class decorator::

            @loader.register("orders")
            class OrdersProcessor(BaseProcessor): ...
        """

        def decorator(target: ProcessorFactory) -> ProcessorFactory:
            self._registry[processor_name] = target
            logger.debug(f"Registered processor {processor_name}")
            return target

        if factory is not None:
            return decorator(factory)
        return decorator

    def registered(self):
        return sorted(self._registry)

    def _is_missing_module(self, exc: ModuleNotFoundError, module_path: str) -> bool:
        # Only a miss on the conventional path (or one of its parents) means
        # "not deployed"; a missing import inside the processor is a load error.
        missing = exc.name or ""
        return bool(missing) and (module_path == missing or module_path.startswith(missing + "."))

    def resolve(self, processor_name: str) -> ProcessorFactory:
        if processor_name in self._registry:
            return self._registry[processor_name]

        if not processor_name:
            raise ProcessorNotFoundError(processor_name, self.module_path("<unset>"))

        module_path = self.module_path(processor_name)
        try:
            module = importlib.import_module(module_path)
        except ModuleNotFoundError as e:
            if self._is_missing_module(e, module_path):
                raise ProcessorNotFoundError(processor_name, module_path) from e
            raise ProcessorLoadError(processor_name, e) from e
        except Exception as e:
            raise ProcessorLoadError(processor_name, e) from e

        processor_class = getattr(module, PROCESSOR_ATTRIBUTE, None)
        if processor_class is None:
            raise ProcessorLoadError(
                processor_name,
                AttributeError(f"module {module_path} has no attribute '{PROCESSOR_ATTRIBUTE}'"),
            )
        return processor_class

    def instantiate(self, processor_name: str, context: Context) -> BaseProcessor:
        try:
            processor_class = self.resolve(processor_name)
            return processor_class(context)
        except Exception as e:
            logger.error(f'Error loading processor "{processor_name}": {e}')
            raise


default_loader = ProcessorLoader(package=config.PROCESSOR_PACKAGE)


def load_processor_class(processor_name: str) -> ProcessorFactory:
    return default_loader.resolve(processor_name)


def get_processor(processor_name: str, context: Context) -> BaseProcessor:
    return default_loader.instantiate(processor_name, context)


def register_processor(processor_name: str, factory: Optional[ProcessorFactory] = None):
    return default_loader.register(processor_name, factory)
