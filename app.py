"""
app.py
──────
Fleet IoT Monitor: application entry point.

Startup sequence:
  1. Configure JSON logging
  2. Create Dash app with the BOOTSTRAP theme
  3. Register all callbacks
  4. Run dev server (or expose `server` for gunicorn in production)

The risk model starts untrained; training is launched from the Model page.
"""
import dash
import dash_bootstrap_components as dbc

from config.logging import configure_logging, get_logger
from config.settings import settings
from src.layout.main import create_layout
from src.state import get_state

# ── 1. Logging ────────────────────────────────────────────────────────────────
configure_logging("fleet-monitor", level=settings.LOG_LEVEL)
log = get_logger(__name__)

state = get_state()
log.info("app_starting", extra={"data_source": state.source.connection_status, "units": len(state.equipment_ids)})

# ── 2. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.BOOTSTRAP],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Fleet Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

# ── 3. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import equipment, model, navigation

navigation.register(app)
equipment.register(app)
model.register(app)

# ── 4. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
