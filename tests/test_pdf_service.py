"""Tests for invoice PDF rendering."""

import logging

import pytest

from app.services.pdf_service import InvoicePdfRenderer, render_fallback_pdf, render_invoice_pdf
from config import Config


class ExplodingRenderer:
    def render(self, invoice):
        raise RuntimeError("layout failed")


class TestRenderInvoicePdf:
    def test_full_layout(self, record_factory):
        content, filename = render_invoice_pdf(record_factory(1), Config.DEALER, Config.BANK_INFO)
        assert content.startswith(b"%PDF")
        assert filename == "TSK-AUTO-Invoice-INV-000001.pdf"

    def test_renders_drafts_with_blank_fields(self, record_factory):
        record = record_factory(2, customer_name="", address="", kilometers="", notes="Spare key included")
        content = InvoicePdfRenderer(Config.DEALER, Config.BANK_INFO).render(record.to_draft())
        assert content.startswith(b"%PDF")

    def test_falls_back_to_text_only(self, record_factory, caplog):
        with caplog.at_level(logging.ERROR, logger="app.services.pdf_service"):
            content, filename = render_invoice_pdf(
                record_factory(1), Config.DEALER, Config.BANK_INFO, renderer=ExplodingRenderer()
            )
        assert content.startswith(b"%PDF")
        assert filename == "TSK-Invoice-INV-000001.pdf"
        assert "text-only fallback" in caplog.text

    @pytest.mark.parametrize("overrides", [
        {"customer_name": "Zoë 王"},
        {"customer_name": "Łukasz Nowak"},
        {"notes": "Deposit €500 paid, balance on delivery"},
        {"address": "12 Main Rd – Sandton"},
    ])
    def test_non_latin_text_keeps_full_layout(self, record_factory, overrides):
        content, filename = render_invoice_pdf(record_factory(1, **overrides), Config.DEALER, Config.BANK_INFO)
        assert content.startswith(b"%PDF")
        assert filename == "TSK-AUTO-Invoice-INV-000001.pdf"

    @pytest.mark.parametrize("name", ["", "Jane Doe"])
    def test_fallback_document(self, record_factory, name):
        content = render_fallback_pdf(record_factory(1, customer_name=name), Config.DEALER, Config.BANK_INFO)
        assert content.startswith(b"%PDF")
