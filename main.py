"""
ParamConverter Demo API Server

Serves the demo application showing request parameters bound to facades.

Environment Variables:
    PARAMCONVERTER_MULTIPART_MAX_MEMORY: Bytes of an uploaded file kept in memory
                                         while parsing multipart bodies (default: 0)
    PARAMCONVERTER_FACADE_STATE_KEY: request.state attribute holding the bound facade
    PARAMCONVERTER_LOG_LEVEL: Log level (default: INFO)
    PARAMCONVERTER_LOG_FILE: Optional rotating log file path
    HOST: Server host address (default: 0.0.0.0)
    PORT: Server port (default: 8005)
    DEBUG: Enable debug mode with auto-reload (default: false)

CLI Usage:
    python main.py

    curl "http://localhost:8005/api/v1/param?param=1"
"""

import uvicorn

from paramconverter.core.config import settings

if __name__ == "__main__":
    port = settings.PORT
    host = settings.HOST

    print(f"Starting {settings.PROJECT_NAME} on {host}:{port}")
    print(f"Multipart memory limit: {settings.MULTIPART_MAX_MEMORY} bytes")

    # Only watch the package sources when reloading
    reload_enabled = bool(settings.DEBUG)
    reload_dirs = None
    if reload_enabled:
        from pathlib import Path

        repo_root = Path(__file__).resolve().parent
        reload_dirs = [str(repo_root / "paramconverter")]

    uvicorn.run(
        "paramconverter.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
        reload_dirs=reload_dirs,
    )
