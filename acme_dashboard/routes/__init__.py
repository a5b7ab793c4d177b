"""Flask blueprint package for the dashboard routes.

Blueprints are defined in the sibling modules (e.g., ``invoice_routes``) and
registered in :mod:`acme_dashboard.__init__`.
"""
