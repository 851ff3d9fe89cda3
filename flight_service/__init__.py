"""Simulated flights moving along great-circle routes, served over HTTP."""
