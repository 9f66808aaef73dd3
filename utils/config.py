# utils/config.py
import os

# ---- store ----
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
STORE_PREFIX = os.getenv("STORE_PREFIX", "cenit_")

# ---- billing ----
TAX_RATE = float(os.getenv("TAX_RATE", "0.13"))
CURRENCY = os.getenv("CURRENCY", "Rs.")

# ---- generative text backend ----
LLM_BACKEND = os.getenv("LLM_BACKEND", "gemini").lower()
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_URL = os.getenv("GEMINI_URL", "https://generativelanguage.googleapis.com/v1beta").rstrip("/")
OLLAMA_URL = os.getenv("OLLAMA_URL", "http://localhost:11434").rstrip("/")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.1:8b")
LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "30"))

# ---- api ----
CORS_ALLOW_ORIGINS = (
    os.getenv("CORS_ALLOW_ORIGINS", "").split(",")
    if os.getenv("CORS_ALLOW_ORIGINS")
    else ["http://localhost:8501", "http://127.0.0.1:8501"]
)

# Prompts sent to the hosted model
INSIGHTS_PROMPT = (
    "You are Cénit, an intelligent restaurant manager AI.\n"
    "Analyze the following restaurant data and provide a concise, strategic insight or prediction (max 3 sentences).\n"
    "Focus on efficiency, revenue opportunities, or inventory alerts.\n\n"
    "Data Context:\n{context}"
)

MARKETING_PROMPT = (
    'Write a short, engaging email marketing copy for a restaurant targeting the "{segment}" customer segment.\n\n'
    "Customer Profile details: {customer_data}\n\n"
    "Keep it warm, professional, and include a clear call to action. Max 100 words."
)

INVENTORY_PROMPT = (
    "You are an expert restaurant inventory manager.\n"
    "Analyze this stock data and upcoming demand (weekend rush expected).\n"
    "Provide 3 specific, actionable restocking or utilization recommendations in a list format.\n\n"
    "Stock Data:\n{context}"
)

STAFFING_PROMPT = (
    "You are an expert HR and staffing manager for a busy restaurant.\n"
    "Analyze the current roster and predicted demand (High occupancy Friday/Saturday).\n"
    "Provide 3 actionable recommendations to optimize the schedule, reduce overtime, or improve service coverage.\n\n"
    "Staffing Context:\n{context}"
)

ADDRESS_PROMPT = (
    "Verify this address for delivery purposes. Provide a brief confirmation of the location "
    "or suggest a correction. Address: {address}"
)

DELIVERY_ESTIMATE_PROMPT = (
    "Estimate delivery time for:\n"
    "Address: {address}\n"
    "Items: {items} (Prep time considerations)\n"
    "Traffic: Moderate\n"
    'Return just the time estimate (e.g. "35-45 mins").'
)

# Fixed service snapshot fed to the dashboard insight panel
DASHBOARD_CONTEXT = (
    "Current Time: 7:30 PM. Occupancy: 85%. Waitlist: 4 parties. "
    "Trending Menu Item: Truffle Pasta. Inventory Alert: Red Wine low."
)
