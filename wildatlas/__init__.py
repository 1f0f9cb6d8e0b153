"""WildAtlas: especies en peligro por país a partir de la Lista Roja de la IUCN.

    clients/     Pasarelas HTTP (IUCN v4, Wikipedia)
    services/    Índice de países, fan-out de taxonomía, agregador, caché, scraping
    reference/   Tablas estáticas y registros de respaldo
    main.py      App FastAPI (/api/species/{code}, /api/health)
"""

__version__ = "1.0.0"
