"""
Conditional dispatch: first with plain nested conditions, then with guarded
cases, where several entries share a tag and the first whose guard holds wins.
"""
from ..diagnostics import Report
from ..definition import Variant
from ..registry import define_union
from ..matching import Match, Case

def main(report:Report=None):
	print("=== When Expressions ===")
	print()
	nested_conditions_example()
	guarded_user_example(report)
	order_status_example(report)
	payment_status_example(report)

User = Variant("User", name=str, age=int, is_verified=bool)

USERS = [
	User("Alice", 16, False),
	User("Bob", 25, True),
	User("Charlie", 30, False),
	User("Dave", 70, True),
]

Person = define_union("Person", User)

def user_status(user) -> str:
	if user.age < 18:
		return "minor"
	elif 18 <= user.age < 65:
		if user.is_verified: return "adult (verified)"
		else: return "adult (unverified)"
	else:
		return "senior"

def nested_conditions_example():
	print("--- Nested conditions ---")
	for user in USERS:
		print("%s: %s" % (user.name, user_status(user)))
	print()

def guarded_user_example(report:Report=None):
	print("--- Guarded cases ---")
	status = Match(Person, [
		Case(User, lambda name, age, ok: "minor", guard=lambda name, age, ok: age < 18),
		Case(User, lambda name, age, ok: "adult (verified)", guard=lambda name, age, ok: age < 65 and ok),
		Case(User, lambda name, age, ok: "adult (unverified)", guard=lambda name, age, ok: age < 65),
		Case(User, lambda name, age, ok: "senior", guard=lambda name, age, ok: age <= 200),
	], otherwise=lambda user: "unknown", report=report)
	for user in USERS:
		print("%s: %s" % (user.name, status(user)))
	print()

def order_status(report:Report=None):
	return define_union(
		"OrderStatus",
		Variant("Pending", days_since_placed=int),
		Variant("Processing", estimated_days=int, is_priority=bool),
		Variant("Shipped", tracking_number=str, is_international=bool),
		Variant("Delivered"),
		report=report,
	)

def order_message(OrderStatus, report:Report=None) -> Match:
	return Match(OrderStatus, [
		Case("Pending", lambda days: "Warning: the order has been pending for %d days" % days, guard=lambda days: days > 3),
		Case("Pending", lambda days: "Order pending (%d day(s))" % days),

		Case("Processing", lambda days, priority: "Priority processing - arriving tomorrow", guard=lambda days, priority: priority and days <= 1),
		Case("Processing", lambda days, priority: "Priority processing - arriving in %d days" % days, guard=lambda days, priority: priority),
		Case("Processing", lambda days, priority: "Processing - arriving in %d days" % days),

		Case("Shipped", lambda number, abroad: "Shipping internationally (tracking number: %s)" % number, guard=lambda number, abroad: abroad),
		Case("Shipped", lambda number, abroad: "Shipping (tracking number: %s)" % number),

		Case("Delivered", lambda: "Delivered"),
	], report=report)

def order_status_example(report:Report=None):
	print("--- Order status, with guards ---")
	OrderStatus = order_status(report)
	message = order_message(OrderStatus, report)
	orders = [
		OrderStatus.Pending(1),
		OrderStatus.Pending(5),
		OrderStatus.Processing(1, True),
		OrderStatus.Processing(3, False),
		OrderStatus.Shipped("ABC123", False),
		OrderStatus.Shipped("INT456", True),
		OrderStatus.Delivered(),
	]
	for order in orders:
		print(message(order))
	print()

def payment_status(report:Report=None):
	return define_union(
		"PaymentStatus",
		Variant("Pending", amount=float),
		Variant("Processing", amount=float, fee=float),
		Variant("Completed", amount=float, transaction_id=str),
		Variant("Failed", reason=str),
		report=report,
	)

def _processing(amount, fee):
	total = amount + fee
	return "Processing: $%s + fee $%s = $%s" % (amount, fee, total)

def payment_message(PaymentStatus, report:Report=None) -> Match:
	return Match(PaymentStatus, {
		"Pending": lambda amount: "Payment pending: $%s" % amount,
		"Processing": _processing,
		"Completed": lambda amount, transaction_id: "Completed: $%s (transaction: %s)" % (amount, transaction_id),
		"Failed": lambda reason: "Failed: " + reason,
	}, report=report)

def payment_status_example(report:Report=None):
	print("--- In practice: payment status ---")
	PaymentStatus = payment_status(report)
	message = payment_message(PaymentStatus, report)
	payments = [
		PaymentStatus.Pending(100.0),
		PaymentStatus.Processing(100.0, 2.5),
		PaymentStatus.Completed(102.5, "TXN-12345"),
		PaymentStatus.Failed("card declined"),
	]
	for payment in payments:
		print(message(payment))
	print()

if __name__ == '__main__':
	main()
