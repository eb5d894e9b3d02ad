"""
Immutable data aggregates: structural equality, rendering, copy-with-changes,
destructuring, defaults, validated construction, and a small domain model
in which every change produces a new value.
"""
from ..diagnostics import Report, UnknownFieldError
from ..definition import Variant
from ..ontology import field
from ..registry import Registry, define_union
from ..matching import Match
from ..values import same
from ..result import Success, Failure, attempt, fold

def main(report:Report=None):
	print("=== Data Classes ===")
	print()
	basic_example()
	defaults_and_validation_example(report)
	immutable_domain_example()

Person = Variant("Person", name=str, age=int, email=str)

def basic_example():
	print("--- The basics ---")
	person1 = Person("Alice", 30, "alice@example.com")
	person2 = Person("Alice", 30, "alice@example.com")
	person3 = person1.copy(age=31)

	print("person1 == person2:", person1 == person2)
	print("person1 is person2:", same(person1, person2))
	print("person1:", person1)
	print("person3 (age changed):", person3)
	print("person1 (untouched):", person1)

	name, age, email = person1
	print("Destructured: %s, %s, %s" % (name, age, email))

	try: person1.copy(nickname="Al")
	except UnknownFieldError as ex: print("Refused:", ex)
	print()

Configuration = Variant(
	"Configuration",
	host=field(str, default="localhost"),
	port=field(int, default=8080),
	ssl=field(bool, default=False),
	timeout=field(int, default=30),
)

Email = Variant("Email", value=str)

def create_email(value:str):
	""" Only addresses with an @ make it into an Email. """
	if "@" in value: return Success(Email(value))
	else: return Failure("not an email address: %r" % value)

def defaults_and_validation_example(report:Report=None):
	print("--- Defaults and validation ---")
	print("Default:", Configuration())
	print("Production:", Configuration(host="api.example.com", ssl=True))
	print()

	show = lambda result: fold(result, lambda email: email.value, lambda error: "rejected (%s)" % error)
	print("Valid email:", show(create_email("user@example.com")))
	print("Invalid email:", show(create_email("invalid-email")))
	print("Checked port:", fold(attempt(int, "8443"), str, lambda error: error))
	print("Unchecked port:", fold(attempt(int, "eighty"), str, lambda error: error))
	print()

	Outcome = define_union(
		"Outcome",
		Variant("Loaded", data=str, timestamp=field(int, default=0)),
		Variant("Error", message=str, code=field(int, None, default=None)),
		Variant("Loading"),
		report=report,
	)
	describe = Match(Outcome, {
		"Loaded": lambda data, timestamp: "Loaded at %d: %s" % (timestamp, data),
		"Error": lambda message, code: "Error %s: %s" % (code, message),
		"Loading": lambda: "Loading...",
	}, report=report)
	print(describe(Outcome.Loaded("User data loaded", timestamp=1700000000)))
	print(describe(Outcome.Error("not found", 404)))
	print(describe(Outcome.Error("unknown")))
	print()

###############################################################################

bank = Registry("bank")
Money = bank.variant("Money", amount=float, currency=field(str, default="USD"))
bank.union("TransactionType", Variant("DEPOSIT"), Variant("WITHDRAWAL"))
Transaction = bank.variant("Transaction", amount="Money", type="TransactionType")
BankAccount = bank.variant("BankAccount", account_number=str, balance="Money", transactions=field(tuple, default=()))
bank.seal()
TransactionType = bank.TransactionType

def money(amount:float, currency:str="USD"):
	if amount < 0: raise ValueError("Amount cannot be negative")
	return Money(amount, currency)

def add(a, b):
	if a.currency != b.currency: raise ValueError("Currency mismatch")
	return a.copy(amount=a.amount + b.amount)

def subtract(a, b):
	if a.currency != b.currency: raise ValueError("Currency mismatch")
	if a.amount < b.amount: raise ValueError("Insufficient funds")
	return a.copy(amount=a.amount - b.amount)

def render_money(m) -> str:
	return "%s %s" % (m.currency, m.amount)

def deposit(account, amount):
	entry = Transaction(amount, TransactionType.DEPOSIT())
	return account.copy(balance=add(account.balance, amount), transactions=account.transactions + (entry,))

def withdraw(account, amount):
	entry = Transaction(amount, TransactionType.WITHDRAWAL())
	return account.copy(balance=subtract(account.balance, amount), transactions=account.transactions + (entry,))

def immutable_domain_example():
	print("--- In practice: an immutable domain model ---")
	account = BankAccount(account_number="1234-5678", balance=money(1000.0))
	print("Initial balance:", render_money(account.balance))

	account = deposit(account, money(500.0))
	print("After deposit:", render_money(account.balance))

	account = withdraw(account, money(200.0))
	print("After withdrawal:", render_money(account.balance))

	overdraft = attempt(withdraw, account, money(5000.0))
	print("Overdraft:", fold(overdraft, lambda acct: "allowed?!", lambda error: "refused (%s)" % error))
	print("Balance still:", render_money(account.balance))

	print()
	print("Transaction history:")
	kind = Match(TransactionType, {"DEPOSIT": lambda: "DEPOSIT", "WITHDRAWAL": lambda: "WITHDRAWAL"})
	for tx in account.transactions:
		print("  %s: %s" % (kind(tx.type), render_money(tx.amount)))
	print()

if __name__ == '__main__':
	main()
