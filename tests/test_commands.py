import pytest

from cyselenium.commands import CommandDefinitionError, collect_commands
from cyselenium.config import ConvertOptions
from cyselenium.context import TranslationContext
from cyselenium.registry import CommandRegistry

COMMANDS = """
Cypress.Commands.add('login', (user: string, pass: string) => {
  cy.visit('/login')
  cy.get('#u').type(user)
  cy.get('#p').type(`${pass}{enter}`)
})

Cypress.Commands.add('logout', { prevSubject: false }, function () {
  cy.get('#menu').click()
  cy.login('guest', 'guest')
})
"""


def _collect(src: str, ctx: TranslationContext = None, **opts):
    ctx = ctx or TranslationContext(CommandRegistry())
    return collect_commands(src, ctx, ConvertOptions(**opts), filename="commands.ts")


def test_methods_return_the_driver():
    collection = _collect(COMMANDS)
    login = collection.methods[0]
    assert login.name == "login"
    assert login.params == ["user", "pass"]
    assert login.java_code == (
        "    public OriginalWebDriver login(String user, String pass) throws Exception {\n"
        '        this.get("/login");\n'
        '        this.findElement(By.cssSelector("#u")).sendKeys(user);\n'
        '        this.findElement(By.cssSelector("#p")).sendKeys("" + pass + Keys.ENTER);\n'
        "        return this;\n"
        "    }"
    )


def test_options_argument_is_skipped_and_earlier_commands_are_known():
    collection = _collect(COMMANDS)
    logout = collection.methods[1]
    assert logout.params == []
    assert '        this.login("guest", "guest");' in logout.java_code.splitlines()
    assert collection.diagnostics == []


def test_registry_keeps_definition_order():
    collection = _collect(COMMANDS)
    assert collection.registry.names == ["login", "logout"]


def test_driver_class_wraps_methods():
    code = _collect(COMMANDS, driver_class="ShopDriver", package="e2e").java_code
    assert code.startswith("package e2e;\n")
    assert "import org.openqa.selenium.chrome.ChromeDriver;" in code
    assert (
        "public class ShopDriver extends ChromeDriver {\n"
        "    public ShopDriver(ChromeOptions options) {\n"
        "        super(options);\n"
        "    }\n"
    ) in code
    assert "    public ShopDriver login(String user, String pass) throws Exception {" in code
    assert code.endswith("    }\n}\n")


def test_non_literal_name_is_fatal():
    with pytest.raises(CommandDefinitionError) as exc:
        _collect("Cypress.Commands.add(name, () => {})")
    assert "string literal" in str(exc.value)
    assert exc.value.line == 1


def test_non_function_body_is_fatal():
    with pytest.raises(CommandDefinitionError, match="function"):
        _collect("const fn = () => {}\n\nCypress.Commands.add('x', fn)")


def test_missing_body_is_fatal():
    with pytest.raises(CommandDefinitionError):
        _collect("Cypress.Commands.add('x')")


def test_other_statements_are_ignored():
    collection = _collect("import './x'\nconst a = 1\nCypress.Commands.overwrite('visit', () => {})")
    assert collection.methods == []
    assert collection.registry.names == []


def test_expression_bodied_command():
    collection = _collect("Cypress.Commands.add('home', () => cy.visit('/'))")
    assert collection.methods[0].java_code.splitlines()[1] == '        this.get("/");'
