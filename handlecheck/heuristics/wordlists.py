"""Vocabularies used by the handle heuristics.

These are defaults; brand, reserved and common-word sets can be extended
via config/heuristics.yaml without touching code.
"""

COMMON_WORDS: frozenset[str] = frozenset({
    # Everyday English
    "the", "and", "for", "are", "but", "not", "you", "all", "can", "her", "was", "one", "our", "out", "day",
    "get", "has", "him", "his", "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy", "did",
    "its", "let", "put", "say", "she", "too", "use", "dad", "mom", "car", "dog", "cat", "run", "top", "hot",
    # Business
    "app", "web", "net", "dev", "pro", "hub", "lab", "box", "bit", "bay", "shop", "store", "sale", "deal",
    "buy", "sell", "save", "free", "best", "cool", "awesome", "amazing", "super", "ultra", "mega", "epic",
    # Tech
    "tech", "code", "hack", "data", "cloud", "ai", "ml", "bot", "api", "sdk", "digital",
    # Slang
    "lol", "omg", "btw", "fyi", "aka", "bae", "lit", "fam", "vibe", "mood", "flex", "stan", "simp", "based",
})

FIRST_NAMES: frozenset[str] = frozenset({
    "james", "john", "robert", "michael", "william", "david", "richard", "joseph", "thomas", "charles",
    "mary", "patricia", "jennifer", "linda", "barbara", "elizabeth", "susan", "jessica", "sarah", "karen",
    "alex", "sam", "chris", "taylor", "jordan", "casey", "riley", "avery", "quinn", "reese",
})

LAST_NAMES: frozenset[str] = frozenset({
    "smith", "johnson", "williams", "brown", "jones", "garcia", "miller", "davis", "rodriguez", "martinez",
    "hernandez", "lopez", "gonzalez", "wilson", "anderson", "thomas", "taylor", "moore", "jackson", "martin",
    "lee", "walker", "hall", "allen", "young", "king", "wright", "scott", "green", "baker",
})

BRANDS: frozenset[str] = frozenset({
    "google", "apple", "microsoft", "amazon", "facebook", "meta", "twitter", "instagram", "tiktok", "youtube",
    "netflix", "tesla", "uber", "airbnb", "spotify", "slack", "zoom", "discord", "reddit", "linkedin",
    "snapchat", "pinterest", "twitch", "github", "gitlab", "docker", "kubernetes", "aws", "azure", "openai",
})

RESERVED_WORDS: frozenset[str] = frozenset({
    "admin", "root", "support", "help", "api", "mod", "moderator", "staff", "team", "official",
    "login", "signup", "register", "delete", "account", "profile", "settings", "system", "service",
    "info", "contact", "about", "terms", "privacy", "legal", "copyright", "trademark", "brand",
})

# Tuples keep prefix/suffix matching order stable
PREFIXES: tuple[str, ...] = (
    "the", "real", "official", "get", "use", "my", "your", "our", "new", "best", "top", "pro", "mr", "ms", "dr",
)

SUFFIXES: tuple[str, ...] = (
    "official", "real", "hq", "app", "io", "ai", "bot", "dev", "pro", "plus", "prime", "max", "ultra", "tv",
)

KEYBOARD_PATTERNS: tuple[str, ...] = (
    "qwerty", "asdf", "zxcv", "qwer", "asdfg", "zxcvb", "qaz", "wsx", "edc",
)

GEO_TERMS: frozenset[str] = frozenset({
    "nyc", "la", "sf", "chicago", "boston", "miami", "seattle", "austin", "denver", "portland",
    "london", "paris", "tokyo", "berlin", "sydney", "toronto", "dubai", "singapore", "hongkong",
    "usa", "uk", "canada", "australia", "japan", "france", "germany", "italy", "spain", "brazil",
})

PROFESSIONAL_TERMS: frozenset[str] = frozenset({
    "ceo", "cto", "cfo", "founder", "entrepreneur", "developer", "designer", "artist", "writer", "coach",
    "consultant", "expert", "specialist", "professional", "agency", "studio", "creative", "digital",
    "marketing", "business", "startup", "company", "brand", "media", "content", "influencer",
})
