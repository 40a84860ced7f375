from site_i18n.config import ExtractionHints
from site_i18n.html_extractor import HtmlExtractor, extract_strings, iter_text_nodes, parse_html

from conftest import INDEX_HTML


class TestExtractStrings:
    def test_collects_text_title_description_and_attributes(self):
        found = extract_strings(INDEX_HTML)
        assert found == {
            "Início",
            "Academia de formação em Lisboa",
            "Bem-vindo",
            "Olá Mundo",
            "Foto da equipa",
        }

    def test_skips_script_and_style(self):
        found = extract_strings(INDEX_HTML)
        assert not any("Não traduzir" in s for s in found)
        assert not any("Nada" in s for s in found)

    def test_skips_code_pre_textarea_svg(self):
        html = (
            "<html><body><p>Texto</p><code>x = 1</code><pre>  bloco </pre>"
            "<textarea>escreva aqui</textarea><svg><text>Rótulo</text></svg>"
            "<noscript>Ative o JavaScript</noscript></body></html>"
        )
        assert extract_strings(html) == {"Texto", "Rótulo"}

    def test_nested_inline_text_is_split_per_node(self):
        html = "<html><body><p>Sobre <strong>Mim</strong> e mais</p></body></html>"
        assert extract_strings(html) == {"Sobre", "Mim", "e mais"}

    def test_attribute_only_element(self):
        html = '<html><body><img alt="Foto da equipa"></body></html>'
        assert extract_strings(html) == {"Foto da equipa"}

    def test_attributes_on_any_element(self):
        html = (
            '<html><body><input placeholder=" Pesquisar " value="Enviar">'
            '<a title="Contactos" aria-label="Abrir menu" href="#"></a></body></html>'
        )
        assert extract_strings(html) == {"Pesquisar", "Enviar", "Contactos", "Abrir menu"}

    def test_ignores_comments_and_whitespace_nodes(self):
        html = "<html><body>\n  <!-- comentário -->\n  <div>   </div><p>Sim</p></body></html>"
        assert extract_strings(html) == {"Sim"}

    def test_empty_attributes_and_description_ignored(self):
        html = '<html><head><meta name="description" content="  "><title> </title></head><body><img alt=""></body></html>'
        assert extract_strings(html) == set()

    def test_text_outside_body_is_not_body_text(self):
        html = "<title>Só título</title><p>Parágrafo</p>"
        assert extract_strings(html) == {"Só título", "Parágrafo"}

    def test_text_after_closing_body_is_extracted(self):
        html = "<html><head><title>Um</title></head><body><p>Dois</p></body></html><p>Três</p>"
        assert extract_strings(html) == {"Um", "Dois", "Três"}

    def test_case_sensitive_identity(self):
        html = "<html><body><p>Olá</p><p>olá</p><p>Olá</p></body></html>"
        assert extract_strings(html) == {"Olá", "olá"}


def test_custom_hints():
    hints = ExtractionHints(skip_tags={"h1"}, attributes=["data-tip"])
    html = '<html><body><h1>Título</h1><p data-tip="Dica" alt="Ignorado">Corpo</p></body></html>'
    assert HtmlExtractor(hints).extract(html) == {"Corpo", "Dica"}


def test_iter_text_nodes_is_shared_with_renderer():
    soup = parse_html(INDEX_HTML)
    nodes = [str(n) for n in iter_text_nodes(soup, ExtractionHints())]
    assert "  Olá Mundo  " in nodes
