from mvcgem.config.settings import ContainerSettings
from mvcgem.config.app_config import AppConfig

__all__ = ["ContainerSettings", "AppConfig"]
