# =============================================================================
# utils/config.py - Configuration management
# =============================================================================

import os
from typing import Optional, List
from dotenv import load_dotenv

DEFAULT_OUTPUT_PATH = "LAPS_Status_Report.html"
DEFAULT_TIMEOUT = 30
DEFAULT_PAGE_SIZE = 500


class Config:
    """Configuration management"""

    def __init__(self):
        load_dotenv()

    @property
    def ad_server(self) -> Optional[str]:
        return os.getenv("AD_SERVER")

    @property
    def ad_username(self) -> Optional[str]:
        return os.getenv("AD_USERNAME")

    @property
    def ad_password(self) -> Optional[str]:
        return os.getenv("AD_PASSWORD")

    @property
    def base_dn(self) -> Optional[str]:
        return os.getenv("BASE_DN")

    @property
    def domain_name(self) -> str:
        """Domain shown in the report footer"""
        return (os.getenv("AD_DOMAIN")
                or os.getenv("USERDNSDOMAIN")
                or domain_from_base_dn(self.base_dn)
                or "unknown")

    @property
    def ldap_timeout(self) -> int:
        return _int_env("LDAP_TIMEOUT", DEFAULT_TIMEOUT)

    @property
    def ldap_page_size(self) -> int:
        return _int_env("LDAP_PAGE_SIZE", DEFAULT_PAGE_SIZE)

    @property
    def report_output_path(self) -> str:
        return os.getenv("REPORT_OUTPUT_PATH") or DEFAULT_OUTPUT_PATH

    def validate_ad_config(self) -> bool:
        """Validate that all required AD configuration is present"""
        required = [self.ad_server, self.ad_username, self.ad_password, self.base_dn]
        return all(required)

    def get_missing_ad_vars(self) -> List[str]:
        """Get list of missing AD configuration variables"""
        vars_and_names = [
            (self.ad_server, "AD_SERVER"),
            (self.ad_username, "AD_USERNAME"),
            (self.ad_password, "AD_PASSWORD"),
            (self.base_dn, "BASE_DN")
        ]
        return [name for var, name in vars_and_names if not var]


def domain_from_base_dn(base_dn: Optional[str]) -> str:
    """DC=corp,DC=local -> corp.local"""
    if not base_dn:
        return ""
    parts = [part.strip() for part in base_dn.split(",")]
    labels = [part[3:] for part in parts if part[:3].upper() == "DC="]
    return ".".join(labels)


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")
