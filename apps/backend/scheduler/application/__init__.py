"""
===============================================================================
APPLICATION LAYER (Public API / Exports)
===============================================================================

Capa de orquestación: los casos de uso viven en `usecases/` y devuelven
resultados tipados (payload o SchedulerError), nunca excepciones de negocio.
===============================================================================
"""
