"""Identidad: usuarios, roles y lectura del token de acceso."""
