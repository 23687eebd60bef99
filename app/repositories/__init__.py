"""
Repositories package

Each repository encapsulates database operations for a model:
- stock_repository.py
- maintenance_repository.py
- etc.

Usage:
    from repositories.stock_repository import StockRepository
    items = StockRepository.list_by_category("out")
"""
