"""Virtual Warehouse: inventory tracking over a spreadsheet store."""
