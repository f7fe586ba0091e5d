"""Shared fixtures for integration tests: fake assignment PDFs."""

import pytest

import internat.contexts.intake.pdf_parser as pdf_parser

PDF_TEXTS = {
    2023: (
        "Arrêté du 1er octobre portant affectation des internes\n"
        "1. Mme Aubert (Julie), biologie médicale, CHU de Lyon.\n"
        "2. M. Bernard (Paul), pharmacie hospitalière, CHU de Nice.\n"
        "3. M. Colin (Marc), biologie\n"
        "médicale, CHU de Nice.\n"
        "4 Mme Dupuis (Anne), biologie médicale, CHU de Lille.\n"
        "5. Mme Etienne (Lea), biologie médicale, CHU de Nulle-Part.\n"
    ),
    2024: (
        "1. M. Faure (Luc), biologie médicale, CHU de Rennes.\n"
        "2. Mme Girard (Eve), biologie médicale, CHU de Lyon.\n"
        "3. M. Henry (Tom), biologie médicale,\n"
        "CHU de Lyon.\n"
    ),
}


@pytest.fixture
def input_dir(tmp_path, monkeypatch):
    """
    Directory with one placeholder PDF per year in PDF_TEXTS.

    Text extraction is replaced by a lookup on the file name.
    """
    directory = tmp_path / "input"
    directory.mkdir()
    for year in PDF_TEXTS:
        (directory / f"affectations_{year}.pdf").write_bytes(b"%PDF-1.4\n")

    def fake_extract_text(pdf_path, max_pages=None):
        year = int(pdf_path.stem.split("_")[1])
        return PDF_TEXTS[year]

    monkeypatch.setattr(pdf_parser, "extract_text", fake_extract_text)
    monkeypatch.setattr(pdf_parser, "page_count", lambda pdf_path: 1)
    return directory


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"
