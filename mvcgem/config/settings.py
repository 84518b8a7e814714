from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


# ----------------------------
# Container settings
# ----------------------------
class ContainerSettings(BaseSettings):
    app_name: str = "mvcgem"

    # Application tree: <application_path>/<app_namespace>/<Context>/...
    # None disables the filesystem checks (controller strict check included)
    application_path: Optional[str] = None
    app_namespace: str = "App"
    default_controller: str = "common"

    # Application config (YAML) handed to the Config component
    config_file: str = "mvcgem.yml"

    # Role -> dotted type path overrides, e.g. MVCGEM_COMPONENTS__CRYPT=myapp.crypt.Crypt
    components: Dict[str, str] = Field(default_factory=dict)

    # Logger
    log_file: Optional[str] = None
    log_level: str = "INFO"

    class Config:
        env_prefix = "MVCGEM_"
        env_nested_delimiter = "__"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
