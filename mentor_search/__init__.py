"""Client-side mentor discovery: filters, paging and result accumulation."""

__version__ = "0.1.0"
