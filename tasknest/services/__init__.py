"""Clients for services outside TaskNest."""
