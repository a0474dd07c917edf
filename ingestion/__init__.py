import ingestion.bills as bills
import ingestion.categories as categories
import ingestion.incomes as incomes
import ingestion.rules as rules
import ingestion.transactions as transactions

_INGESTION_MODULES = {
    "bills": bills,
    "categories": categories,
    "incomes": incomes,
    "rules": rules,
    "transactions": transactions,
}

# Record kinds whose ingest() takes a current date for anchor defaults
DATED_KINDS = ("bills", "incomes")


def get_ingestion_module(module_name: str):
    """Get an ingestion module by record kind."""
    if module_name not in _INGESTION_MODULES:
        raise ValueError(f"Unknown ingestion module: {module_name}")
    return _INGESTION_MODULES[module_name]


def get_available_modules():
    """Get list of available ingestion modules."""
    return list(_INGESTION_MODULES.keys())
