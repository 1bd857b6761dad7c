"""Donation System package.

Feature modules (donations, users) each carry a Protocol repository, a MySQL
implementation and a service; a thin Flask controller layer sits on top.
"""
