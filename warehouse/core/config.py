# warehouse/core/config.py
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

from warehouse.inventory.models.enums import StoreLayout


class RunConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8015


class ApiV1Prefix(BaseModel):
    prefix: str = "/v1"
    departments: str = "/departments"
    items: str = "/items"


class ApiPrefix(BaseModel):
    prefix: str = "/api"
    v1: ApiV1Prefix = ApiV1Prefix()


class StoreConfig(BaseModel):
    # memory: для локального запуска/тестов, xlsx: файл на диске, gsheets: Google Sheets
    backend: Literal["memory", "xlsx", "gsheets"] = "memory"
    spreadsheet_id: str = ""
    credentials_file: str = "credentials/service_account.json"
    xlsx_path: str = "data/warehouse.xlsx"
    # отделы, которыми заполняется вкладка DEPARTMENTS у memory-бэкенда
    seed_departments: list[str] = []


class InventoryConfig(BaseModel):
    departments_sheet: str = "DEPARTMENTS"
    items_sheet: str = "ITEMS_MASTER"          # используется только в single_table
    layout: StoreLayout = StoreLayout.PER_DEPARTMENT
    low_stock_threshold: int = 10
    code_width: int = 4
    auto_code: bool = True
    auto_provision: bool = True


class SessionConfig(BaseModel):
    secret_key: str = "CHANGE_ME"              # подпись cookie-сессии (flash-сообщения)
    cookie_name: str = "warehouse_session"


class LogConfig(BaseModel):
    level: str = "INFO"


class SiteConfig(BaseModel):
    title: str = "Virtual Warehouse Pro"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env.example", ".env"),
        case_sensitive=False,
        env_nested_delimiter="__",
        env_prefix="APP_CONFIG__",
        extra="ignore",
    )
    run: RunConfig = RunConfig()
    api: ApiPrefix = ApiPrefix()

    store: StoreConfig = StoreConfig()
    inventory: InventoryConfig = InventoryConfig()

    session: SessionConfig = SessionConfig()
    log: LogConfig = LogConfig()
    site: SiteConfig = SiteConfig()

settings = Settings()
