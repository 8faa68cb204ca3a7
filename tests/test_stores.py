"""
Tests for the tabular store adapters.

Memory store directly, xlsx store on a temporary workbook,
Google Sheets store against an in-process fake gspread client.
"""

from __future__ import annotations

import re

import pytest
from google.auth.exceptions import RefreshError
from gspread.exceptions import APIError, SpreadsheetNotFound, WorksheetNotFound
from openpyxl import Workbook, load_workbook

from warehouse.core.config import InventoryConfig
from warehouse.core.dependencies import get_inventory_service
from warehouse.core.exceptions import InvalidDepartment, NotFound, SchemaMissing, StoreUnavailable
from warehouse.crud.gsheets_store import GoogleSheetsTabularStore
from warehouse.crud.memory_store import MemoryTabularStore
from warehouse.crud.tabular_store import cell_text
from warehouse.crud.xlsx_store import XlsxTabularStore
from warehouse.inventory.layouts import DEPT_HEADERS
from warehouse.inventory.schemas.item import ItemCreate, ItemUpdate
from warehouse.inventory.services.inventory_service import InventoryService
from warehouse.scripts.init_workbook import create_workbook, main as init_workbook_main


HEADERS = list(DEPT_HEADERS)


# =============================================================================
# Memory
# =============================================================================


class TestMemoryStore:

    def test_keyed_update_and_delete(self):
        store = MemoryTabularStore({"T": [["Key"], ["a", 1], [" b ", 2], ["a", 3]]})

        assert store.update_row_by_key("T", "a", ["a", 10]) is True
        assert store.read_rows("T") == [["Key"], ["a", 10], [" b ", 2], ["a", 3]]

        assert store.delete_row_by_key("T", "b") is True
        assert store.read_rows("T") == [["Key"], ["a", 10], ["a", 3]]

        assert store.delete_row_by_key("T", "zzz") is False

    def test_header_row_is_never_matched(self):
        store = MemoryTabularStore({"T": [["Key"]]})
        assert store.find_row_by_key("T", "Key") is None

    def test_read_returns_copies(self):
        store = MemoryTabularStore({"T": [["Key"], ["a"]]})
        store.read_rows("T")[1][0] = "changed"
        assert store.read_rows("T")[1][0] == "a"

    def test_missing_table(self):
        with pytest.raises(SchemaMissing, match="Missing sheet: T"):
            MemoryTabularStore().read_rows("T")

    def test_unavailable(self):
        store = MemoryTabularStore(available=False)
        with pytest.raises(StoreUnavailable):
            store.has_table("T")

    def test_delete_row_out_of_range(self):
        store = MemoryTabularStore({"T": [["Key"], ["a"]]})
        with pytest.raises(NotFound):
            store.delete_row("T", 3)
        assert store.read_rows("T") == [["Key"], ["a"]]


# =============================================================================
# xlsx
# =============================================================================


@pytest.fixture
def workbook(tmp_path):
    path = tmp_path / "warehouse.xlsx"
    create_workbook(path, ["HR", "Billing and Collection"], InventoryConfig())
    return path


class TestXlsxStore:

    def test_init_workbook_provisions_tabs(self, workbook):
        store = XlsxTabularStore(workbook)

        assert store.read_rows("DEPARTMENTS") == [["Department"], ["HR"], ["Billing and Collection"]]
        assert store.read_rows("HR") == [HEADERS]
        assert store.read_rows("Billing and Collection") == [HEADERS]

    def test_row_operations_persist(self, workbook):
        store = XlsxTabularStore(workbook)
        store.append_row("HR", ["HR-0001", "Chair", "", 5, "", "LOW", ""])
        store.append_row("HR", ["HR-0002", "Desk", "", 20, "", "OK", ""])

        reopened = XlsxTabularStore(workbook)
        assert [r[0] for r in reopened.read_rows("HR")[1:]] == ["HR-0001", "HR-0002"]

        assert reopened.update_row_by_key("HR", "HR-0002", ["HR-0002", "Desk", "", 3, "", "LOW", ""])
        assert reopened.read_rows("HR")[2][3] == 3

        assert reopened.delete_row_by_key("HR", "HR-0001")
        rows = reopened.read_rows("HR")
        assert len(rows) == 2
        assert [cell_text(c) for c in rows[1]] == ["HR-0002", "Desk", "", "3", "", "LOW", ""]

    def test_service_end_to_end(self, workbook):
        service = InventoryService(XlsxTabularStore(workbook), InventoryConfig())

        assert service.list_departments() == ["HR", "Billing and Collection"]
        assert service.add_item(ItemCreate(department="HR", name="Chair", stock=15)).code == "HR-0001"
        service.update_item(ItemUpdate(original_code="HR-0001", code="HR-0001", name="Chair", department="HR", stock=2))

        item = service.list_items("HR")[0]
        assert (item.code, item.stock, item.status, item.category) == ("HR-0001", 2, "LOW", "")

        service.delete_item("HR-0001", "HR")
        with pytest.raises(NotFound):
            service.delete_item("HR-0001", "HR")

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreUnavailable, match="Cannot open workbook"):
            XlsxTabularStore(tmp_path / "nope.xlsx").read_rows("HR")

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip")
        with pytest.raises(StoreUnavailable):
            XlsxTabularStore(path).has_table("HR")

    def test_missing_sheet(self, workbook):
        with pytest.raises(SchemaMissing):
            XlsxTabularStore(workbook).read_rows("Logistics")

    def test_invalid_sheet_title(self, workbook):
        with pytest.raises(InvalidDepartment):
            XlsxTabularStore(workbook).create_table("Marketing/Creative")

    def test_sheet_lookup_ignores_case(self, workbook):
        store = XlsxTabularStore(workbook)
        service = InventoryService(store, InventoryConfig())

        assert store.has_table("hr") is True
        assert service.add_item(ItemCreate(department="hr", name="Chair")).code == "HR-0001"
        assert [i.code for i in service.list_items("hr")] == ["HR-0001"]
        assert [i.code for i in service.list_items("HR")] == ["HR-0001"]
        assert load_workbook(workbook).sheetnames == ["DEPARTMENTS", "HR", "Billing and Collection"]

    def test_save_failure(self, workbook, monkeypatch):
        def locked(self, filename):
            raise PermissionError(13, "Permission denied", str(filename))

        monkeypatch.setattr(Workbook, "save", locked)
        with pytest.raises(StoreUnavailable, match="Cannot save workbook"):
            XlsxTabularStore(workbook).append_row("HR", ["HR-0001", "Chair"])

    def test_delete_row_out_of_range(self, workbook):
        store = XlsxTabularStore(workbook)
        with pytest.raises(NotFound):
            store.delete_row("HR", 5)
        assert store.read_rows("HR") == [HEADERS]

    def test_init_workbook_refuses_overwrite(self, workbook):
        with pytest.raises(SystemExit):
            init_workbook_main(["--path", str(workbook), "--department", "HR"])

    def test_init_workbook_cli(self, tmp_path):
        path = tmp_path / "data" / "new.xlsx"
        init_workbook_main(["--path", str(path), "--department", "Ops"])
        assert XlsxTabularStore(path).read_rows("Ops") == [HEADERS]


# =============================================================================
# Google Sheets (fake gspread client)
# =============================================================================


class FakeWorksheet:
    def __init__(self, title: str) -> None:
        self.title = title
        self.rows: list[list] = []
        self.frozen_rows = 0

    def get_all_values(self):
        return [["" if c is None else str(c) for c in r] for r in self.rows]

    def append_row(self, values, value_input_option=None):
        self.rows.append(list(values))

    def update(self, range_name=None, values=None, value_input_option=None):
        row = int(re.match(r"[A-Z]+(\d+)", range_name).group(1))
        while len(self.rows) < row:
            self.rows.append([])
        self.rows[row - 1] = list(values[0])

    def delete_rows(self, index):
        del self.rows[index - 1]

    def freeze(self, rows=None, cols=None):
        self.frozen_rows = rows


class FakeSpreadsheet:
    def __init__(self) -> None:
        self.sheets: dict[str, FakeWorksheet] = {}

    def worksheet(self, title):
        try:
            return self.sheets[title]
        except KeyError:
            raise WorksheetNotFound(title) from None

    def add_worksheet(self, title, rows, cols):
        ws = FakeWorksheet(title)
        self.sheets[title] = ws
        return ws


class FakeClient:
    def __init__(self, spreadsheets: dict[str, FakeSpreadsheet]) -> None:
        self.spreadsheets = spreadsheets

    def open_by_key(self, key):
        try:
            return self.spreadsheets[key]
        except KeyError:
            raise SpreadsheetNotFound(key) from None


class FakeResponse:
    """Minimal HTTP response accepted by gspread.exceptions.APIError."""

    def __init__(self, code: int, message: str) -> None:
        self.status_code = code
        self._error = {"code": code, "message": message, "status": "ERROR"}
        self.text = message

    def json(self):
        return {"error": self._error}


def api_error(code: int = 429, message: str = "Quota exceeded") -> APIError:
    return APIError(FakeResponse(code, message))


@pytest.fixture
def spreadsheet() -> FakeSpreadsheet:
    ss = FakeSpreadsheet()
    ss.add_worksheet("DEPARTMENTS", rows=100, cols=1).rows = [["Department"], ["HR"], [""]]
    return ss


@pytest.fixture
def gsheets(spreadsheet) -> GoogleSheetsTabularStore:
    return GoogleSheetsTabularStore("sheet-id", client=FakeClient({"sheet-id": spreadsheet}))


class TestGoogleSheetsStore:

    def test_provisioning_writes_header_and_freezes(self, gsheets, spreadsheet):
        service = InventoryService(gsheets, InventoryConfig())

        assert service.list_departments() == ["HR"]
        assert spreadsheet.sheets["HR"].rows == [HEADERS]
        assert spreadsheet.sheets["HR"].frozen_rows == 1

    def test_crud_round(self, gsheets, spreadsheet):
        service = InventoryService(gsheets, InventoryConfig())
        code = service.add_item(ItemCreate(department="HR", name="Chair", stock=15, unit="pcs")).code
        assert code == "HR-0001"
        assert spreadsheet.sheets["HR"].rows[1] == ["HR-0001", "Chair", "", 15, "pcs", "OK", ""]

        service.update_item(ItemUpdate(original_code=code, code=code, name="Chair", department="HR", stock=4))
        item = service.list_items("HR")[0]
        assert (item.stock, item.status, item.unit) == (4, "LOW", "")

        service.delete_item(code, "HR")
        assert spreadsheet.sheets["HR"].rows == [HEADERS]

    def test_unknown_spreadsheet(self, spreadsheet):
        store = GoogleSheetsTabularStore("other-id", client=FakeClient({"sheet-id": spreadsheet}))
        with pytest.raises(StoreUnavailable, match="Cannot open spreadsheet"):
            store.read_rows("DEPARTMENTS")

    def test_missing_spreadsheet_id(self, spreadsheet):
        store = GoogleSheetsTabularStore("", client=FakeClient({"sheet-id": spreadsheet}))
        with pytest.raises(StoreUnavailable):
            store.has_table("DEPARTMENTS")

    def test_missing_credentials_file(self, tmp_path):
        store = GoogleSheetsTabularStore("sheet-id", credentials_file=str(tmp_path / "missing.json"))
        with pytest.raises(StoreUnavailable, match="credentials"):
            store.has_table("DEPARTMENTS")

    def test_missing_worksheet(self, gsheets):
        assert gsheets.has_table("Logistics") is False
        with pytest.raises(SchemaMissing):
            gsheets.read_rows("Logistics")

    def test_api_error_on_add_worksheet(self, gsheets, spreadsheet, monkeypatch):
        def quota(title, rows, cols):
            raise api_error(429)

        monkeypatch.setattr(spreadsheet, "add_worksheet", quota)
        with pytest.raises(StoreUnavailable, match="add_worksheet"):
            InventoryService(gsheets, InventoryConfig()).list_departments()

    def test_api_error_on_append(self, gsheets, spreadsheet, monkeypatch):
        service = InventoryService(gsheets, InventoryConfig())
        service.list_departments()

        def forbidden(values, value_input_option=None):
            raise api_error(403, "The caller does not have permission")

        monkeypatch.setattr(spreadsheet.sheets["HR"], "append_row", forbidden)
        with pytest.raises(StoreUnavailable, match="append_row"):
            service.add_item(ItemCreate(department="HR", name="Chair"))
        assert spreadsheet.sheets["HR"].rows == [HEADERS]

    def test_refresh_error_on_open(self, spreadsheet, monkeypatch):
        client = FakeClient({"sheet-id": spreadsheet})

        def expired(key):
            raise RefreshError("invalid_grant: Invalid JWT Signature.")

        monkeypatch.setattr(client, "open_by_key", expired)
        store = GoogleSheetsTabularStore("sheet-id", client=client)
        with pytest.raises(StoreUnavailable, match="Cannot open spreadsheet"):
            store.has_table("DEPARTMENTS")

    def test_api_error_is_json_503(self, gsheets, spreadsheet, app, client, monkeypatch):
        def quota(title, rows, cols):
            raise api_error(429)

        monkeypatch.setattr(spreadsheet, "add_worksheet", quota)
        app.dependency_overrides[get_inventory_service] = lambda: InventoryService(gsheets, InventoryConfig())

        r = client.get("/api/v1/departments")
        assert r.status_code == 503
        body = r.json()
        assert body["success"] is False
        assert "Google Sheets request failed" in body["error"]
