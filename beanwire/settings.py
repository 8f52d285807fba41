"""
ContainerSettings

Typed view of the properties mapping handed to a container. Only a few keys
mean anything to the container itself; every other key is kept and ignored.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

AUTO_INIT_BEAN = "autoInitBean"
BOOT_SCAN = "bootScan"
BEAN_SCAN = "beanScan"


class ContainerSettings(BaseModel):
    """Settings read by the container.

    Attributes:
        auto_init_bean: When true, ``init_beans()`` builds every registered bean
        boot_scan: Namespaces searched by boot-time definition scanners
        bean_scan: Namespaces searched by bean definition scanners
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    auto_init_bean: bool = Field(default=False, alias=AUTO_INIT_BEAN)
    boot_scan: List[Any] = Field(default_factory=list, alias=BOOT_SCAN)
    bean_scan: List[Any] = Field(default_factory=list, alias=BEAN_SCAN)

    @field_validator("auto_init_bean", mode="before")
    @classmethod
    def none_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("boot_scan", "bean_scan", mode="before")
    @classmethod
    def non_list_is_empty(cls, value: Any) -> Any:
        # Anything that is not a list of namespaces means "scan nothing"
        if not isinstance(value, (list, tuple)):
            return []
        return list(value)
