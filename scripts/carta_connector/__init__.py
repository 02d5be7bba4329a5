"""Carta connector.

Reads issuers, investor firms and portfolios from the Carta API with
cursor pagination and translates them into a generic identity resource
graph (users, groups, entitlements, grants).
"""
