"""
Built-in search engine data.

BUILTIN_ENGINES maps a hostname substring to the query parameters that engine
uses, tried in order. DEFAULT_TARGETS are the engines offered as switch
destinations (can be overridden in settings.toml [targets]).
"""

from powersearch.engines.registry import EngineEntry

BUILTIN_ENGINES = (
    # International
    EngineEntry("google.com", ("q",)),
    EngineEntry("google.co.uk", ("q",)),
    EngineEntry("google.ca", ("q",)),
    EngineEntry("google.com.au", ("q",)),
    EngineEntry("bing.com", ("q",)),
    EngineEntry("duckduckgo.com", ("q",)),
    EngineEntry("yandex.com", ("text",)),
    EngineEntry("yandex.ru", ("text",)),
    EngineEntry("ecosia.org", ("q",)),
    EngineEntry("startpage.com", ("query",)),
    EngineEntry("searx.me", ("q",)),
    # Code
    EngineEntry("github.com", ("q",)),
    # Chinese
    EngineEntry("baidu.com", ("wd", "word")),
    EngineEntry("sogou.com", ("query",)),
    EngineEntry("so.com", ("q",)),
    EngineEntry("soso.com", ("w",)),
    EngineEntry("360.cn", ("q",)),
    EngineEntry("sm.cn", ("q",)),  # Shenma
    # Other
    EngineEntry("yahoo.com", ("p",)),
    EngineEntry("ask.com", ("q",)),
    EngineEntry("aol.com", ("q",)),
)

# Tried on any hostname when no registered engine matched
GENERIC_PARAMS = ("q", "query", "search", "wd", "word", "text", "keywords")

DEFAULT_TARGETS = [
    {"name": "Google", "url": "https://www.google.com/search?q={query}", "icon": "🔍"},
    {"name": "Bing", "url": "https://www.bing.com/search?q={query}", "icon": "🅱️"},
    {"name": "DuckDuckGo", "url": "https://duckduckgo.com/?q={query}", "icon": "🦆"},
    {"name": "Baidu", "url": "https://www.baidu.com/s?wd={query}", "icon": "🐾"},
    {"name": "Yandex", "url": "https://yandex.com/search/?text={query}", "icon": "🌐"},
    {"name": "GitHub", "url": "https://github.com/search?q={query}", "icon": "🐙"},
    {"name": "Sogou", "url": "https://www.sogou.com/web?query={query}", "icon": "🐶"},
    {"name": "Yahoo", "url": "https://search.yahoo.com/search?p={query}", "icon": "📮"},
]
