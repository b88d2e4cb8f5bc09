# function_app.py
import logging

import azure.functions as func

# ---- Make log output visible in Azure Log Stream ----
logging.basicConfig(level=logging.INFO)

# ---- Blueprints (handlers em direito/api, import lazy dentro de cada rota) ----
from blueprints.bp_core import bp as core_bp
from blueprints.bp_prazos import bp as prazos_bp
from blueprints.bp_legal import bp as legal_bp

app = func.FunctionApp()

app.register_functions(core_bp)
app.register_functions(prazos_bp)
app.register_functions(legal_bp)
