"""
Provider names, environment variables and defaults.

Values here are read by unified_llm_sdk/config/settings.py; providers never
read the environment directly.
"""

# Registered provider names
OPENAI = "openai"
OLLAMA = "ollama"
GENAI = "genai"

PROVIDER_ALIASES = {
    "gemini": GENAI,
    "google": GENAI,
}

# OpenAI
OPENAI_API_KEY_ENV_VAR = "OPENAI_API_KEY"
OPENAI_BASE_URL_ENV_VAR = "OPENAI_BASE_URL"
OPENAI_ORG_ENV_VAR = "OPENAI_ORG_ID"
OPENAI_TIMEOUT_ENV_VAR = "OPENAI_TIMEOUT"
DEFAULT_OPENAI_TIMEOUT = 60.0

# Ollama
OLLAMA_HOST_ENV_VAR = "OLLAMA_HOST"
OLLAMA_TIMEOUT_ENV_VAR = "OLLAMA_TIMEOUT"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_OLLAMA_TIMEOUT = 120.0

# Google GenAI (Gemini API key or Vertex AI project)
GENAI_API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
GENAI_VERTEXAI_ENV_VAR = "GOOGLE_GENAI_USE_VERTEXAI"
GENAI_PROJECT_ENV_VAR = "GOOGLE_CLOUD_PROJECT"
GENAI_LOCATION_ENV_VAR = "GOOGLE_CLOUD_LOCATION"
