from universal_minter.core.adapters.BaseAdapter import BaseAdapter

__all__ = [
    "BaseAdapter",
]
