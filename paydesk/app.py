# module paydesk.app
from paydesk.app_setup.factory import create_app

# App globale
app = create_app()
