"""Painel de metas de vendas por loja."""

__version__ = "0.1.0"
