import json
import logging

from site_i18n.cache import OverrideStore, TranslationCache


class TestTranslationCache:
    def test_missing_file_is_empty(self, tmp_path):
        cache = TranslationCache(str(tmp_path / "cache"))
        assert cache.load("en") == {}
        assert not cache.has("en", "Olá")
        assert cache.get("en", "Olá") is None

    def test_reads_existing_file(self, tmp_path, write_json):
        write_json(tmp_path / "en.json", {"Olá": "Hello"})
        cache = TranslationCache(str(tmp_path))
        assert cache.has("en", "Olá")
        assert cache.get("en", "Olá") == "Hello"
        assert not cache.has("es", "Olá")

    def test_set_never_overwrites(self, tmp_path, write_json):
        write_json(tmp_path / "en.json", {"Olá": "Hello"})
        cache = TranslationCache(str(tmp_path))
        assert cache.set("en", "Olá", "Hi") is False
        assert cache.set("en", "Adeus", "Goodbye") is True
        assert cache.get("en", "Olá") == "Hello"
        assert cache.get("en", "Adeus") == "Goodbye"

    def test_save_is_readable_and_diffable(self, tmp_path):
        cache = TranslationCache(str(tmp_path / "nested" / "cache"))
        cache.set("en", "Sobre Nós", "About Us")
        path = cache.save("en")
        text = open(path, encoding="utf-8").read()
        assert "Sobre Nós" in text  # not \u-escaped
        assert text.count("\n") >= 3  # indented, one entry per line
        assert json.loads(text) == {"Sobre Nós": "About Us"}

    def test_save_with_mapping_replaces_content(self, tmp_path, write_json):
        write_json(tmp_path / "es.json", {"a": "b"})
        cache = TranslationCache(str(tmp_path))
        cache.save("es", {"Olá": "Hola"})
        assert json.loads((tmp_path / "es.json").read_text(encoding="utf-8")) == {"Olá": "Hola"}

    def test_forget(self, tmp_path, write_json):
        write_json(tmp_path / "en.json", {"Olá": "Hello", "Sim": "Yes"})
        cache = TranslationCache(str(tmp_path))
        assert cache.forget("en", ["Olá", "Não existe"]) == 1
        assert cache.load("en") == {"Sim": "Yes"}

    def test_malformed_file_degrades_to_empty_with_warning(self, tmp_path, caplog):
        (tmp_path / "en.json").write_text("{not json", encoding="utf-8")
        cache = TranslationCache(str(tmp_path), logging.getLogger("site-i18n-test"))
        with caplog.at_level(logging.WARNING, logger="site-i18n-test"):
            assert cache.load("en") == {}
        assert "en.json" in caplog.text

    def test_wrong_shape_degrades_to_empty(self, tmp_path, write_json, caplog):
        write_json(tmp_path / "en.json", ["Olá", "Hello"])
        write_json(tmp_path / "es.json", {"Olá": 3})
        cache = TranslationCache(str(tmp_path), logging.getLogger("site-i18n-test"))
        with caplog.at_level(logging.WARNING, logger="site-i18n-test"):
            assert cache.load("en") == {}
            assert cache.load("es") == {}
        assert caplog.text.count("Ignoring") == 2


class TestOverrideStore:
    def test_file_naming(self, tmp_path, write_json):
        write_json(tmp_path / "overrides.en.json", {"Início": "Home"})
        store = OverrideStore(str(tmp_path))
        assert store.path_for("en").endswith("overrides.en.json")
        assert store.get("en", "Início") == "Home"

    def test_read_only(self, tmp_path):
        store = OverrideStore(str(tmp_path))
        assert not hasattr(store, "set")
        assert not hasattr(store, "save")
