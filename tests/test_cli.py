import json

from cyselenium.cli import main

SPEC = """
describe('Search', () => {
  it('finds things', () => {
    cy.visit('/')
    cy.get('#q').type('shoes{enter}')
    cy.login('bob')
  })
})
"""

COMMANDS = """
Cypress.Commands.add('login', (name) => {
  cy.get('#name').type(name)
})
"""


def test_missing_input_exits_2(tmp_path, capsys):
    rc = main(["convert", str(tmp_path / "missing.cy.ts")])
    assert rc == 2
    assert "cyselenium: input not found" in capsys.readouterr().out


def test_collect_then_convert(tmp_path, capsys):
    out_dir = tmp_path / "java"
    commands = tmp_path / "commands.ts"
    commands.write_text(COMMANDS, encoding="utf-8")
    spec = tmp_path / "search.cy.ts"
    spec.write_text(SPEC, encoding="utf-8")

    assert main(["collect", str(commands), "--out-dir", str(out_dir)]) == 0
    driver = (out_dir / "OriginalWebDriver.java").read_text(encoding="utf-8")
    assert "public OriginalWebDriver login(String name) throws Exception {" in driver
    assert (out_dir / "commands.txt").read_text(encoding="utf-8") == "login"

    assert main(["convert", str(spec), "--out-dir", str(out_dir)]) == 0
    test_class = (out_dir / "SearchTest.java").read_text(encoding="utf-8")
    assert '        driver.login("bob");\n' in test_class
    out = capsys.readouterr().out
    assert f"cyselenium: wrote {out_dir / 'SearchTest.java'}" in out


def test_convert_without_registry_warns_but_succeeds(tmp_path, capsys):
    spec = tmp_path / "search.cy.ts"
    spec.write_text(SPEC, encoding="utf-8")
    rc = main(["convert", str(spec), "--out-dir", str(tmp_path)])
    assert rc == 0
    assert "cyselenium: warning: unsupported method: login" in capsys.readouterr().out
    assert "/* unsupported method: login(.login('bob')) */" in (tmp_path / "SearchTest.java").read_text(encoding="utf-8")


def test_strict_fails_on_gaps(tmp_path):
    spec = tmp_path / "search.cy.ts"
    spec.write_text(SPEC, encoding="utf-8")
    assert main(["convert", str(spec), "--out-dir", str(tmp_path), "--strict"]) == 1


def test_no_inline_diagnostics_flag(tmp_path):
    spec = tmp_path / "search.cy.ts"
    spec.write_text(SPEC, encoding="utf-8")
    main(["convert", str(spec), "--out-dir", str(tmp_path), "--no-inline-diagnostics"])
    assert "/*" not in (tmp_path / "SearchTest.java").read_text(encoding="utf-8")


def test_malformed_command_exits_1(tmp_path, capsys):
    commands = tmp_path / "commands.ts"
    commands.write_text("Cypress.Commands.add(name, () => {})", encoding="utf-8")
    assert main(["collect", str(commands), "--out-dir", str(tmp_path)]) == 1
    assert "cyselenium: error:" in capsys.readouterr().out
    assert not (tmp_path / "commands.txt").exists()


def test_config_file_and_flag_precedence(tmp_path):
    config = tmp_path / "cyselenium.json"
    config.write_text(json.dumps({"package": "e2e", "driverClass": "ShopDriver", "outputDir": str(tmp_path / "cfg")}),
                      encoding="utf-8")
    spec = tmp_path / "search.cy.ts"
    spec.write_text(SPEC, encoding="utf-8")
    rc = main(["convert", str(spec), "--config", str(config), "--driver-class", "WebDriverX"])
    assert rc == 0
    code = (tmp_path / "cfg" / "SearchTest.java").read_text(encoding="utf-8")
    assert code.startswith("package e2e;\n")
    assert "    WebDriverX driver;\n" in code


def test_invalid_config_exits_1(tmp_path, capsys):
    config = tmp_path / "cyselenium.json"
    config.write_text(json.dumps({"bogus": True}), encoding="utf-8")
    spec = tmp_path / "search.cy.ts"
    spec.write_text(SPEC, encoding="utf-8")
    assert main(["convert", str(spec), "--config", str(config)]) == 1
    assert "invalid config" in capsys.readouterr().out
