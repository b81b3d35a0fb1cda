"""Sanctions watch-list name search service."""
