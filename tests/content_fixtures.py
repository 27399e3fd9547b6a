"""Sample documents database shared by the tests.

Italian posts 10, 12, 13 are listable; 11 is the English translation of 10;
14 is a draft. Pages 20 > 21 > 22 form the menu tree (23 is a draft).
30 and 31 are sideposts linked as boxes from post 10; 40 and 41 are its
attachments. Tag 8 ("blocked") is denylisted.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from wpdocs.database.schema import (
    BlacklistedTag,
    CategoryFamily,
    DataWarehouseLink,
    IclLocaleMap,
    IclTranslation,
    MenuEntry,
    Post,
    PostMeta,
    Term,
    TermRelationship,
    TermTaxonomy,
)

UPLOADS = "http://docs.istat.it/www/wp-content/uploads"

LINKED_SIDEPOSTS = 'a:2:{s:8:"contatti";a:1:{i:0;s:2:"30";}s:4:"Note";a:1:{i:0;i:31;}}'


def _post(id, title, post_type="post", status="publish", parent=0, menu_order=0,
          date=None, content="", mime="", guid=""):
    return Post(
        ID=id,
        post_type=post_type,
        post_status=status,
        post_title=title,
        post_content=content,
        post_parent=parent,
        menu_order=menu_order,
        post_date_gmt=date,
        post_modified_gmt=date,
        post_mime_type=mime,
        guid=guid,
    )


def seed_content(session: Session) -> None:
    session.add_all([
        IclLocaleMap(code="it", locale="it_IT"),
        IclLocaleMap(code="en", locale="en_US"),
    ])

    session.add_all([
        _post(10, "Inflazione marzo", date=datetime(2012, 3, 10, 10, 0), content="<p>Prezzi al consumo</p>"),
        _post(11, "Inflation March", date=datetime(2012, 3, 10, 10, 0)),
        _post(12, "Occupazione", date=datetime(2012, 4, 1, 8, 0)),
        _post(13, "Commercio estero", date=datetime(2012, 2, 1, 8, 0)),
        _post(14, "Bozza", status="draft", date=datetime(2012, 5, 1, 8, 0)),
        _post(20, "Chi siamo", post_type="page"),
        _post(21, "Organizzazione", post_type="page", parent=20, menu_order=1),
        _post(22, "Sede", post_type="page", parent=21),
        _post(23, "Bozza pagina", post_type="page", status="draft", parent=20, menu_order=2),
        _post(30, "Contatti", post_type="sidepost", content="Scrivici"),
        _post(31, "Note", post_type="sidepost", status="draft", content="Nascosto"),
        _post(40, "Report", post_type="attachment", status="inherit", parent=10, menu_order=1,
              mime="application/pdf", guid=f"{UPLOADS}/2012/03/report.pdf"),
        _post(41, "Tavole", post_type="attachment", status="inherit", parent=10, menu_order=0,
              mime="application/vnd.ms-excel", guid=f"{UPLOADS}/2012/03/tavole.xls"),
    ])

    meta = [
        (10, "titolobreve", "Inflazione"),
        (10, "sottotitolo", "Marzo 2012"),
        (10, "descrizioneperiodo", "Marzo 2012"),
        (10, "news", "Descrizione"),
        (10, "news_rss", "Sintesi"),
        (10, "image", "inflazione.png"),
        (10, "data_pubblicazione", "20120315"),
        (10, "inizioperiodo", "20120301"),
        (10, "fineperiodo", "20120331"),
        (10, "docs_linkedSideposts", LINKED_SIDEPOSTS),
        (11, "titolobreve", "Inflation"),
        (12, "data_pubblicazione", "2012041"),
        (12, "inizioperiodo", "20120101"),
        (12, "fineperiodo", "20120131"),
        (21, "titolobreve", "Org"),
    ]
    session.add_all([PostMeta(post_id=pid, meta_key=key, meta_value=value) for pid, key, value in meta])

    session.add_all([
        IclTranslation(element_type="post_post", element_id=10, trid=100, language_code="it"),
        IclTranslation(element_type="post_post", element_id=11, trid=100, language_code="en"),
        IclTranslation(element_type="post_post", element_id=12, trid=101, language_code="it"),
        IclTranslation(element_type="post_post", element_id=13, trid=102, language_code="it"),
        IclTranslation(element_type="post_post", element_id=14, trid=103, language_code="it"),
        IclTranslation(element_type="post_page", element_id=20, trid=104, language_code="it"),
        IclTranslation(element_type="tax_post_tag", element_id=7, trid=200, language_code="it"),
        IclTranslation(element_type="tax_post_tag", element_id=8, trid=201, language_code="it"),
        IclTranslation(element_type="tax_post_tag", element_id=9, trid=202, language_code="it"),
    ])

    session.add_all([
        Term(term_id=1, name="Tipologie"),
        Term(term_id=2, name="Temi"),
        Term(term_id=3, name="Comunicato stampa @it"),
        Term(term_id=4, name="Statistica report"),
        Term(term_id=5, name="Prezzi"),
        Term(term_id=7, name="prezzi"),
        Term(term_id=8, name="blocked"),
        Term(term_id=9, name="lavoro"),
    ])
    session.add_all([
        TermTaxonomy(term_taxonomy_id=1, term_id=1, taxonomy="category", parent=0),
        TermTaxonomy(term_taxonomy_id=2, term_id=2, taxonomy="category", parent=0),
        TermTaxonomy(term_taxonomy_id=3, term_id=3, taxonomy="category", parent=1, description="Comunicati"),
        TermTaxonomy(term_taxonomy_id=4, term_id=4, taxonomy="category", parent=1),
        TermTaxonomy(term_taxonomy_id=5, term_id=5, taxonomy="category", parent=2),
        TermTaxonomy(term_taxonomy_id=7, term_id=7, taxonomy="post_tag", count=2),
        TermTaxonomy(term_taxonomy_id=8, term_id=8, taxonomy="post_tag", count=5),
        TermTaxonomy(term_taxonomy_id=9, term_id=9, taxonomy="post_tag", count=1),
    ])
    session.add_all([
        CategoryFamily(term_id=1, label="types", lang="it"),
        CategoryFamily(term_id=2, label="themes", lang="it"),
        DataWarehouseLink(id_wp=5, id_dw="DCSP_IPCA"),
        BlacklistedTag(term_id=8),
    ])
    session.add_all([
        TermRelationship(object_id=10, term_taxonomy_id=3, term_order=0),
        TermRelationship(object_id=10, term_taxonomy_id=5, term_order=1),
        TermRelationship(object_id=10, term_taxonomy_id=7, term_order=2),
        TermRelationship(object_id=10, term_taxonomy_id=8, term_order=3),
        TermRelationship(object_id=12, term_taxonomy_id=4, term_order=0),
        TermRelationship(object_id=12, term_taxonomy_id=9, term_order=1),
        TermRelationship(object_id=13, term_taxonomy_id=5, term_order=0),
        TermRelationship(object_id=13, term_taxonomy_id=7, term_order=1),
    ])

    session.add(MenuEntry(id=1, post_id=20, label="Chi siamo", lang="it"))
    session.commit()
