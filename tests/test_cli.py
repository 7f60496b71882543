from typer.testing import CliRunner

from repogen.cli.app import app
from test_descriptor_reader import REPOSITORY_XML

runner = CliRunner()

def databaseUrl(databasePath):
    return f"sqlite+aiosqlite:///{databasePath}"

def test_descriptors_command(databasePath, tmp_path):
    outputDir = tmp_path / "descriptors"
    result = runner.invoke(app, [
        "descriptors", str(outputDir), "--url", databaseUrl(databasePath), "--author", "cli-user"
    ])

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in outputDir.iterdir()) == [
        "CUSTOMERSRepository.xml", "ORDERSRepository.xml", "OrderItemsRepository.xml"
    ]
    assert "<author>cli-user</author>" in (outputDir / "ORDERSRepository.xml").read_text(encoding="utf-8")

def test_constants_command(databasePath, tmp_path):
    outputDir = tmp_path / "constants"
    result = runner.invoke(app, [
        "constants", str(outputDir), "--url", databaseUrl(databasePath),
        "--table-pattern", "CUST%", "--package", "com.example.meta"
    ])

    assert result.exit_code == 0, result.output
    content = (outputDir / "CUSTOMERSMetaData.java").read_text(encoding="utf-8")
    assert content.startswith("package com.example.meta;\n")
    assert "REQUIRED_CUSTOMER_ID = true;" in content

def test_unknown_policy_is_rejected(databasePath, tmp_path):
    result = runner.invoke(app, [
        "descriptors", str(tmp_path / "out"), "--url", databaseUrl(databasePath), "--policy", "ignore"
    ])
    assert result.exit_code == 2

def test_unreachable_database_fails(tmp_path):
    result = runner.invoke(app, [
        "descriptors", str(tmp_path / "out"), "--url", f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'none.db'}"
    ])
    assert result.exit_code == 1

def test_inspect_command(tmp_path):
    path = tmp_path / "OrderRepository.xml"
    path.write_text(REPOSITORY_XML, encoding="utf-8")

    result = runner.invoke(app, ["inspect", str(path)])

    assert result.exit_code == 0, result.output
    assert "OrderRepository" in result.output
    assert "* customer" in result.output
    assert "primary table: SALES.ORDERS" in result.output

def test_inspect_invalid_file(tmp_path):
    path = tmp_path / "broken.xml"
    path.write_text("<gsa-template>", encoding="utf-8")

    result = runner.invoke(app, ["inspect", str(path)])
    assert result.exit_code == 1
