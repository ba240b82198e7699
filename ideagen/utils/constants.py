"""Constants used throughout the application."""

# Provider ids in display order
PROVIDER_IDS = ["openai", "gemini", "anthropic", "perplexity", "deepseek", "grok"]

# Provider endpoints
OPENAI_BASE_URL = "https://api.openai.com/v1"
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
ANTHROPIC_ENDPOINT = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
PERPLEXITY_BASE_URL = "https://api.perplexity.ai"
DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"
GROK_BASE_URL = "https://api.grok.ai/v1"

# Provider models
OPENAI_MODEL = "gpt-3.5-turbo"
ANTHROPIC_MODEL = "claude-3-sonnet-20240229"
PERPLEXITY_MODEL = "sonar-medium-online"
DEEPSEEK_MODEL = "deepseek-chat"
GROK_MODEL = "grok-1"

# Generation limits
TEMPERATURE = 0.7
MAX_TOKENS = 1000

# Response parsing
MAX_TEXT_SEGMENTS = 4
MIN_SEGMENT_LENGTH = 10
MIN_DESCRIPTION_LENGTH = 10
MAX_FIRST_SENTENCE_LENGTH = 80
MAX_TITLE_LENGTH = 100
TITLE_EXCLUDED_WORDS = ["market", "difficulty", "description", "small", "medium", "large", "easy", "hard"]

# Export
EXPORT_HEADER = ["Title", "Description", "Market Size", "Difficulty", "Source", "Favorite"]
EXPORT_FILENAME_PREFIX = "saas-ideas"
