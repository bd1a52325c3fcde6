from services.tenant_import import normalize_header, pick, read_rows, row_to_tenant_fields


def _upload(client, headers, text, filename="tenants.csv", encoding="utf-8"):
    return client.post(
        "/api/tenants/import",
        files={"file": (filename, text.encode(encoding), "text/csv")},
        headers=headers,
    )


def test_normalize_header():
    assert normalize_header(" Name of Tenant ") == "nameoftenant"
    assert normalize_header("RENT_PER_ANNUM") == "rentperannum"


def test_row_mapping_for_spreadsheet_headers():
    fields = row_to_tenant_fields({"Name of Tenant": "Jane Doe", "Rent Per Annum": "₦150,000"})

    assert fields["tenant_name"] == "Jane Doe"
    assert fields["rent_per_annum"] == 150000
    assert fields["amount_paid"] == 0
    assert fields["accommodation_type"] == ""
    assert fields["property_address"] == ""
    assert fields["phone"] == ""
    assert fields["quit_notice"] is False


def test_synonyms_in_priority_order_skip_empty_cells():
    row = {"Tenant": "", "Name": "Fallback Name", "Address": "Plot 4", "Property": ""}
    assert pick(row, "tenant_name") == "Fallback Name"
    assert pick(row, "property_address") == "Plot 4"


def test_quit_column_accepts_yes_only():
    assert row_to_tenant_fields({"name": "A", "Quit Notice": "YES"})["quit_notice"] is True
    assert row_to_tenant_fields({"name": "A", "quit": "no"})["quit_notice"] is False
    assert row_to_tenant_fields({"name": "A", "quit": "true"})["quit_notice"] is False


def test_row_without_name_is_skipped():
    assert row_to_tenant_fields({"Rent": "1000"}) is None


def test_read_rows_strips_bom_and_blank_lines():
    content = "\ufeffName,Rent\n  Ada  , 1000 \n\n,\nBen,2000\n".encode("utf-8")
    rows = read_rows(content)
    assert rows == [{"Name": "Ada", "Rent": "1000"}, {"Name": "Ben", "Rent": "2000"}]


def test_import_endpoint(client, admin, admin_headers):
    csv_text = (
        "S/N,Name of Tenant,Type of Accommodation,Property,Period,Rent Per Annum,Amount Paid,Phone,Remarks,Quit Notice\n"
        "1,Jane Doe,2 Bedroom,Block A,2025/2026,\"₦150,000\",\"₦50,000\",0803 111 2222,good,no\n"
        "2,,Shop,Block B,,\"₦90,000\",,,,\n"
        "3,John Obi,Self Contain,Block C,,\"120,000.50\",,,,Yes\n"
    )
    response = _upload(client, admin_headers, csv_text, encoding="utf-8-sig")
    assert response.status_code == 200

    body = response.json()
    assert body["imported"] == 2
    jane, john = body["tenants"]

    assert jane["tenant_name"] == "Jane Doe"
    assert jane["accommodation_type"] == "2 Bedroom"
    assert jane["property_address"] == "Block A"
    assert jane["period"] == "2025/2026"
    assert jane["rent_per_annum"] == 150000
    assert jane["amount_paid"] == 50000
    assert jane["phone"] == "0803 111 2222"
    assert jane["notes"] == "good"
    assert jane["quit_notice"] is False
    assert jane["lease_start"] is None
    assert jane["created_by"] == admin.id

    assert john["rent_per_annum"] == 120000.5
    assert john["quit_notice"] is True
    assert john["sn"] == jane["sn"] + 1

    listed = client.get("/api/tenants", headers=admin_headers).json()
    assert [t["tenant_name"] for t in listed] == ["Jane Doe", "John Obi"]


def test_import_requires_file(client, staff_headers):
    response = client.post("/api/tenants/import", headers=staff_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "No file"}


def test_import_rejects_non_utf8(client, staff_headers):
    response = _upload(client, staff_headers, "Name\nJosé\n", encoding="latin-1")
    assert response.status_code == 400
