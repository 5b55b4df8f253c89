import json
from pathlib import Path

import pytest

from contentgen import ContentGenerationService
from contentgen.errors import FileMissing, MandatoryResolutionFailure, TemplateNotFound


def _write(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def _customer_config(tmp_path: Path, **options) -> Path:
    cfg = {
        "configVersion": "1.0",
        "dataSources": {"customer": {"filePath": "data/customer.json", "priority": 1}},
        "mappings": [
            {"placeholder": "customerName", "source": "customer", "jsonPath": "$.customer.name", "mandatory": True},
            {
                "placeholder": "customerMiddleName",
                "source": "customer",
                "jsonPath": "$.customer.middleName",
                "mandatory": False,
                "defaultValue": "",
            },
            {"placeholder": "phone", "source": "customer", "jsonPath": "$.customer.phone"},
        ],
        "options": options,
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(cfg), encoding="utf-8")
    return path


# ==========================================================
# CUSTOMER SCENARIO
# ==========================================================

def test_customer_scenario(tmp_path: Path):
    _customer_config(tmp_path)
    _write(tmp_path / "data" / "customer.json", {"customer": {"name": "John Doe", "phone": "555-1234"}})
    svc = ContentGenerationService.from_file("config.json", tmp_path)

    ctx = svc.resolved_context()
    assert ctx["customerName"] == "John Doe"
    assert ctx["customerMiddleName"] == ""
    assert ctx["phone"] == "555-1234"

    # drop the name and start over with a fresh service
    _write(tmp_path / "data" / "customer.json", {"customer": {"phone": "555-1234"}})
    svc = ContentGenerationService.from_file("config.json", tmp_path)
    with pytest.raises(MandatoryResolutionFailure, match="customerName"):
        svc.resolved_context()


def test_clear_cache_picks_up_changed_document(tmp_path: Path):
    _customer_config(tmp_path)
    data = tmp_path / "data" / "customer.json"
    _write(data, {"customer": {"name": "John Doe"}})
    svc = ContentGenerationService.from_file("config.json", tmp_path)
    assert svc.resolved_context()["customerName"] == "John Doe"

    _write(data, {"customer": {"name": "Jane Roe"}})
    # still served from cache
    assert svc.resolved_context()["customerName"] == "John Doe"
    svc.clear_cache()
    assert svc.resolved_context()["customerName"] == "Jane Roe"


def test_idempotent_with_cache(tmp_path: Path):
    _write(tmp_path / "data" / "customer.json", {"customer": {"name": "John Doe", "phone": "555-1234"}})
    svc = ContentGenerationService.from_file(_customer_config(tmp_path), tmp_path)
    assert svc.resolved_context() == svc.resolved_context()


def test_preload_fails_fast_on_missing_file(tmp_path: Path):
    _customer_config(tmp_path, cacheDataSources=True)
    with pytest.raises(FileMissing):
        ContentGenerationService.from_file("config.json", tmp_path)


def test_no_preload_without_cache(tmp_path: Path):
    _customer_config(tmp_path, cacheDataSources=False)
    svc = ContentGenerationService.from_file("config.json", tmp_path)
    # the missing file only surfaces when resolving
    with pytest.raises(FileMissing):
        svc.resolved_context()


# ==========================================================
# INVENTORY REPORT (conditions, calculations, formatters, rendering)
# ==========================================================

INVENTORY = {
    "report": {"date": "2024-03-01", "generatedAt": "2024-03-01T08:15:00"},
    "company": {
        "addresses": [
            {"type": "PHYSICAL", "street": "1 Warehouse Way"},
            {"type": "MAILING", "street": "PO Box 42"},
        ]
    },
    "items": [
        {"name": "Laptop", "price": 999.99, "qty": 3},
        {"name": "Monitor", "price": 499.99, "qty": 5},
        {"name": "Keyboard", "price": 199.99, "qty": 10},
    ],
}


def _inventory_service(tmp_path: Path) -> ContentGenerationService:
    _write(tmp_path / "inventory.json", INVENTORY)
    cfg = {
        "configVersion": "2.0",
        "dataSources": {"inventory": {"filePath": "inventory.json", "priority": 1}},
        "formatters": {
            "date": {"defaultInputFormat": "yyyy-MM-dd", "defaultOutputFormat": "MMMM dd, yyyy"},
            "currency": {"defaultCurrency": "USD", "defaultLocale": "en_US", "decimalPlaces": 2},
        },
        "mappings": [
            {"placeholder": "reportDate", "source": "inventory", "jsonPath": "$.report.date", "formatter": {"type": "date"}},
            {
                "placeholder": "generatedAt",
                "source": "inventory",
                "jsonPath": "$.report.generatedAt",
                "formatter": {"type": "date", "inputFormat": "yyyy-MM-dd'T'HH:mm:ss", "outputFormat": "yyyy-MM-dd HH:mm"},
            },
            {
                "placeholder": "mailingStreet",
                "source": "inventory",
                "jsonPath": "$.company.addresses[0].street",
                "conditionalSelection": {
                    "enabled": True,
                    "extractFirstElement": True,
                    "conditions": [
                        {"jsonPath": "$.company.addresses[?(@.type == 'MAILING')].street", "description": "mailing"},
                        {"jsonPath": "$.company.addresses[?(@.type == 'PHYSICAL')].street", "description": "physical"},
                    ],
                },
            },
            {
                "placeholder": "totalValue",
                "source": "inventory",
                "jsonPath": "$.items",
                "customCalculation": {"type": "sum", "field": "price"},
                "formatter": {"type": "currency"},
            },
            {"placeholder": "itemCount", "source": "inventory", "jsonPath": "$.items", "customCalculation": {"type": "count"}},
            {"placeholder": "items", "source": "inventory", "jsonPath": "$.items"},
        ],
    }
    (tmp_path / "config.json").write_text(json.dumps(cfg), encoding="utf-8")
    return ContentGenerationService.from_file("config.json", tmp_path)


def test_inventory_context(tmp_path: Path):
    ctx = _inventory_service(tmp_path).resolved_context()
    assert ctx["reportDate"] == "March 01, 2024"
    assert ctx["generatedAt"] == "2024-03-01 08:15"
    assert ctx["mailingStreet"] == "PO Box 42"
    assert ctx["totalValue"] == "$1,699.97"
    assert ctx["itemCount"] == 3
    assert [i["name"] for i in ctx["items"]] == ["Laptop", "Monitor", "Keyboard"]


def test_inventory_render_loop(tmp_path: Path):
    svc = _inventory_service(tmp_path)
    (tmp_path / "report.j2").write_text(
        "Report {{ reportDate }}\n"
        "{% for item in items %}\n"
        "- {{ item.name }} x{{ item.qty }}\n"
        "{% endfor %}\n"
        "Total: {{ totalValue }} ({{ itemCount }} items)\n"
    )
    out = svc.generate_content("report.j2")
    assert out == (
        "Report March 01, 2024\n"
        "- Laptop x3\n"
        "- Monitor x5\n"
        "- Keyboard x10\n"
        "Total: $1,699.97 (3 items)\n"
    )


def test_render_json_template(tmp_path: Path):
    svc = _inventory_service(tmp_path)
    (tmp_path / "summary.json.j2").write_text(
        '{"street": "{{ mailingStreet }}", "count": {{ itemCount }}}'
    )
    assert svc.generate_content_as_json("summary.json.j2") == {"street": "PO Box 42", "count": 3}


def test_render_with_additional_context(tmp_path: Path):
    svc = _inventory_service(tmp_path)
    (tmp_path / "t.j2").write_text("{{ mailingStreet }} / {{ signature }}")
    assert svc.generate_content_with_context("t.j2", {"signature": "ACME"}) == "PO Box 42 / ACME"


def test_render_from_string(tmp_path: Path):
    svc = _inventory_service(tmp_path)
    assert svc.generate_content_from_string("{{ itemCount }} items") == "3 items"


def test_missing_template(tmp_path: Path):
    svc = _inventory_service(tmp_path)
    with pytest.raises(TemplateNotFound):
        svc.generate_content("nope.j2")


def test_statistics(tmp_path: Path):
    stats = _inventory_service(tmp_path).statistics()
    assert stats["configVersion"] == "2.0"
    assert stats["mappingCount"] == 6
    assert stats["cachingEnabled"] is True
    assert stats["formattersEnabled"] is True
    assert stats["conditionalSelectionEnabled"] is True
    assert stats["cacheStats"] == {"cachedSources": 1, "configuredSources": 1}


def test_simple_service_ignores_mapping_policy(tmp_path: Path):
    _customer_config(tmp_path, defaultValue="-")
    _write(tmp_path / "data" / "customer.json", {"customer": {"phone": "555-1234"}})
    svc = ContentGenerationService.from_file("config.json", tmp_path, simple=True)
    # customerName is mandatory, but only the pipeline enforces that
    ctx = svc.resolved_context()
    assert ctx == {"customerName": "-", "customerMiddleName": "-", "phone": "555-1234"}
    assert svc.generate_content_from_string("{{ customerName }}/{{ phone }}") == "-/555-1234"
