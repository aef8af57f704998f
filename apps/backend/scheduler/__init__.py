"""
Scheduler backend.

Reservas exclusivas de un recurso compartido + catálogo de duties con su
ciclo de vida de asignaciones, con autorización owner-vs-admin.
"""
