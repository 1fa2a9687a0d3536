from contractgen.config.settings import Settings
from contractgen.container.base import BaseContainerAdapter
from contractgen.container.zip_adapter import DocxContainerAdapter, OdtContainerAdapter


class ContainerAdapterFactory:
    """Creates the container adapter for the configured document format."""

    ADAPTERS: dict[str, type[BaseContainerAdapter]] = {
        "docx": DocxContainerAdapter,
        "odt": OdtContainerAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseContainerAdapter:
        container_format = settings.container_format.lower()
        adapter_cls = cls.ADAPTERS.get(container_format)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown container format '{container_format}'. "
                f"Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
