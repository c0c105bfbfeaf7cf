"""Search engine layer — Bridges searchable records to search backends.

Built-in engines:
  - elasticsearch: Elasticsearch (query_string search, bulk writes, index admin)

Implement ``SearchEngine`` to connect another backend.
"""
