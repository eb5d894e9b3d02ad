"""
Behavior attached by composition: wrappers that own a delegate and forward
to it explicitly, a value computed on first use, cells which get a say
in every change made to them, and a property which logs every access.
"""
from ..diagnostics import Report
from ..delegation import forwarding, Lazy, Logged, observable, vetoable

def main(report:Report=None):
	print("=== Delegation ===")
	print()
	forwarding_example()
	repository_example()
	lazy_example()
	watched_example()
	logged_property_example()

class ConsolePrinter:
	def emit(self, message): print("[Console] " + message)

class FilePrinter:
	def emit(self, message): print("[File] %s (saved to file)" % message)

@forwarding("printer", "emit")
class Logger:
	""" Logs by way of whichever printer it owns. """
	def __init__(self, printer):
		self.printer = printer

	def log(self, level, message):
		self.emit("[%s] %s" % (level, message))

def forwarding_example():
	print("--- Forwarding ---")
	Logger(ConsolePrinter()).log("INFO", "Application started")
	Logger(FilePrinter()).log("ERROR", "Database connection failed")
	print()

class InMemoryRepository:
	def __init__(self):
		self._items = []
	def save(self, item): self._items.append(item)
	def find_all(self): return list(self._items)
	def count(self): return len(self._items)

@forwarding("delegate", "save", "find_all", "count")
class CachedRepository:
	"""
	Remembers the answer to find_all until the next save.
	Everything it does not override goes straight to the delegate.
	"""
	def __init__(self, delegate):
		self.delegate = delegate
		self._cache = None

	def find_all(self):
		if self._cache is None:
			print("  Cache miss - fetching from delegate")
			self._cache = self.delegate.find_all()
		else:
			print("  Cache hit!")
		return self._cache

	def save(self, item):
		self.delegate.save(item)
		self._cache = None

def repository_example():
	print("--- A caching repository ---")
	repo = CachedRepository(InMemoryRepository())
	repo.save("Item 1")
	repo.save("Item 2")
	print("Items stored:", repo.count())

	print("First find_all:")
	print(repo.find_all())
	print()
	print("Second find_all:")
	print(repo.find_all())
	print()

def _compute_expensive_data():
	print("  Computing expensive data...")
	return "Expensive Result"

class HeavyObject:
	def __init__(self):
		self._expensive_data = Lazy(_compute_expensive_data)

	@property
	def expensive_data(self): return self._expensive_data.value

def lazy_example():
	print("--- Lazy initialization ---")
	obj = HeavyObject()
	print("Object created")
	print("First access: " + obj.expensive_data)
	print("Second access: " + obj.expensive_data)
	print()

def _accept_price(old, new) -> bool:
	if new < 0:
		print("  Rejected: Price cannot be negative")
		return False
	print("  Accepted: Price changed from %s to %s" % (old, new))
	return True

def watched_example():
	print("--- Observable and vetoable cells ---")
	name = observable("Unknown", lambda old, new: print("  name changed from %r to %r" % (old, new)))
	print("Initial name: " + name.get())
	name.set("Alice")
	name.set("Bob")
	print()

	price = vetoable(0.0, _accept_price)
	price.set(100.0)
	price.set(-50.0)
	print("Final price:", price.get())
	print()

class Config:
	timeout = Logged(30)

def logged_property_example():
	print("--- A logging property ---")
	config = Config()
	print("Reading timeout:")
	print(config.timeout)
	print()
	print("Setting timeout:")
	config.timeout = 60
	print()

if __name__ == '__main__':
	main()
