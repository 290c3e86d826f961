#!/usr/bin/env python3
"""
Keyword Autocomplete API
Run script for the FastAPI application
"""

import uvicorn
from autocomplete_api.config.settings import Settings

if __name__ == "__main__":
    settings = Settings()

    print(f"🚀 Starting {settings.api_title}")
    print(f"📍 Server will run on http://{settings.host}:{settings.port}")
    print(f"🔍 Elasticsearch: {settings.elasticsearch_url} (index '{settings.index_name}')")
    print(f"📚 API documentation available at http://{settings.host}:{settings.port}/docs")

    uvicorn.run(
        "autocomplete_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True
    )
