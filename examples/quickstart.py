"""Quickstart example for langcache.

This example writes a small set of translation files into a temporary
directory, initializes a loader against them and shows the lookup styles,
cache reuse and fallback merging.

Note: Each loader initializes exactly once. Build a new I18n object per
request (or per process) instead of reconfiguring an initialized one.
"""

import tempfile
from pathlib import Path

from langcache import I18n, RequestSignals, get_namespace, translate
from langcache.runtime import deactivate

with tempfile.TemporaryDirectory() as workdir:
    root = Path(workdir)
    lang_dir = root / "lang"
    lang_dir.mkdir()
    (lang_dir / "lang_en.ini").write_text(
        """\
greeting = Hello World!
welcome = Welcome back, %s. You have %d new messages.
title = {APP} home

[category]
somethingother = Something other...
""",
        encoding="utf-8",
    )
    (lang_dir / "lang_de.ini").write_text(
        """\
greeting = Hallo Welt!

[category]
somethingother = Etwas anderes...
""",
        encoding="utf-8",
    )
    template = str(lang_dir / "lang_{LANGUAGE}.ini")
    cache_dir = str(root / "langcache")

    # Example 1: Basic initialization
    print("=" * 50)
    print("Example 1: Basic Initialization")
    print("=" * 50)

    i18n = I18n(template, cache_dir, "en")
    i18n.static_map = {"APP": "Demo"}
    L = i18n.init()

    print(L.greeting)
    # Output: Hello World!
    print(L["category_somethingother"])
    # Output: Something other...
    print(L("welcome", ["Anna", 3]))
    # Output: Welcome back, Anna. You have 3 new messages.
    print(L.title)
    # Output: Demo home

    # Example 2: Language signals
    print("\n" + "=" * 50)
    print("Example 2: Language Signals")
    print("=" * 50)

    signals = RequestSignals.from_wsgi_environ(
        {"HTTP_ACCEPT_LANGUAGE": "fr-FR,de-DE;q=0.8", "QUERY_STRING": "page=2"}
    )
    german = I18n(template, cache_dir, "en", "T", signals=signals)
    print(german.get_user_langs())
    # Output: ('fr', 'de', 'en')
    german.init()
    print(german.applied_lang, translate("T", "greeting"))
    # Output: de Hallo Welt!

    # Example 3: Fallback merging
    print("\n" + "=" * 50)
    print("Example 3: Fallback Merging")
    print("=" * 50)

    merged = I18n(template, cache_dir, "en", "M")
    merged.forced_lang = "de"
    merged.merge_fallback = True
    M = merged.init()
    print(M.greeting, "/", M("welcome", ["Anna", 1]))
    # Output: Hallo Welt! / Welcome back, Anna. You have 1 new messages.

    # Example 4: Cache reuse
    print("\n" + "=" * 50)
    print("Example 4: Cache Reuse")
    print("=" * 50)

    # Same options as Example 1, so the record written there is reused
    deactivate("L")
    again = I18n(template, cache_dir, "en")
    again.static_map = {"APP": "Demo"}
    again.init()
    summary = again.summary
    if summary is not None:
        print(f"  cache file: {summary.cache_path.name}")
        print(f"  cache status: {summary.cache_status}")
        print(f"  compiled: {summary.compiled}")
        # Output: compiled: False

    print("\nActive namespaces:", [p for p in ("L", "T", "M") if get_namespace(p)])

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
