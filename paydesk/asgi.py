"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.
Toute la configuration est centralisée dans paydesk.app_setup.factory.
"""

from paydesk.app import app

if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "paydesk.asgi:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
