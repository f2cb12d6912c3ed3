"""Servicios del Core: el pipeline de una llamada.

call_builder -> dispatcher -> classifier -> resource_client.
"""
