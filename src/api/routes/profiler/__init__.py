"""Rotas do profiler (consulta de profiles por token)."""
