"""
Sealed classes and sealed interfaces, expressed as tagged unions.

A union names all of its cases up front, so a match over it can be checked
for completeness. Unions may also be built out of other unions, and one
variant may belong to several of them at once.
"""
from ..diagnostics import Report
from ..definition import Variant
from ..ontology import field
from ..registry import Registry, define_union
from ..matching import Match
from ..values import memberships

def main(report:Report=None):
	print("=== Sealed Types ===")
	print()
	old_way_example(report)
	new_way_example(report)
	api_response_example(report)

def old_way_example(report:Report=None):
	print("--- One sealed class ---")
	Result = define_union(
		"Result",
		Variant("Success", data=str),
		Variant("Error", message=str),
		Variant("Loading"),
		report=report,
	)
	handle_result = Match(Result, {
		"Success": lambda data: "Data: " + data,
		"Error": lambda message: "Error: " + message,
		"Loading": lambda: "Loading...",
		# No fallback needed: every case is covered.
	}, report=report)
	print(handle_result(Result.Success("user data")))
	print(handle_result(Result.Error("network failure")))
	print(handle_result(Result.Loading()))
	print()

def ui_states(report:Report=None) -> Registry:
	"""
	A UI state composed of three families. SuccessWithLoading belongs to
	both the loading family and the data family.
	"""
	ui = Registry("ui", report=report)
	ui.variant("SuccessWithLoading", data=str, is_refreshing=bool)
	ui.union("LoadingState", Variant("Idle"), Variant("Loading"), "SuccessWithLoading")
	ui.union("DataState", Variant("Success", data=str), Variant("Empty", message=str), "SuccessWithLoading")
	ui.union("ErrorState", Variant("NetworkError", code=int), Variant("ValidationError", field=str))
	ui.union("UiState", "LoadingState", "DataState", "ErrorState")
	return ui.seal()

def new_way_example(report:Report=None):
	print("--- Sealed interfaces ---")
	ui = ui_states(report)
	handle_ui_state = Match(ui.UiState, {
		ui.LoadingState.Idle: lambda: "Idle",
		ui.LoadingState.Loading: lambda: "Loading...",
		ui.DataState.Success: lambda data: "Success: " + data,
		ui.DataState.Empty: lambda message: "Empty: " + message,
		ui.ErrorState.NetworkError: lambda code: "Network error (code: %d)" % code,
		ui.ErrorState.ValidationError: lambda field: "Validation failed: " + field,
		ui.SuccessWithLoading: lambda data, is_refreshing: "Data: %s (refreshing: %s)" % (data, is_refreshing),
	}, report=report)
	states = [
		ui.LoadingState.Idle(),
		ui.LoadingState.Loading(),
		ui.DataState.Success("user list"),
		ui.DataState.Empty("no results"),
		ui.ErrorState.NetworkError(404),
		ui.ErrorState.ValidationError("email"),
		ui.SuccessWithLoading("data", True),
	]
	for state in states:
		print(handle_ui_state(state))
	print()

	# Each union sees the shared variant through its own tag space.
	both = ui.SuccessWithLoading("data", True)
	as_loading = Match(ui.LoadingState, {
		"Idle": lambda: "idle",
		"Loading": lambda: "busy",
		"SuccessWithLoading": lambda data, is_refreshing: "refreshing" if is_refreshing else "settled",
	}, report=report)
	as_data = Match(ui.DataState, [
		("Success", lambda data: "showing " + data),
		("Empty", lambda message: "nothing to show"),
		("SuccessWithLoading", lambda data, is_refreshing: "showing " + data),
	], report=report)
	print("Member of:", ", ".join(sorted(u.name for u in memberships(both))))
	print("As a LoadingState:", as_loading(both))
	print("As a DataState:", as_data(both))
	print("Is an ErrorState:", both in ui.ErrorState)
	print()

def api_response_example(report:Report=None):
	print("--- In practice: API responses ---")
	UserProfile = Variant("UserProfile", id=int, name=str, email=str)
	ApiResponse = define_union(
		"ApiResponse",
		Variant("Success", data=object, cached=field(bool, default=False)),
		Variant("Error", code=int, message=str),
		Variant("Loading"),
		report=report,
	)
	response = ApiResponse.Success(data=UserProfile(1, "Alice", "alice@example.com"), cached=False)

	def on_success(data, cached):
		print("User: " + data.name)
		if cached: print("(cached data)")

	process = Match(ApiResponse, {
		"Success": on_success,
		"Error": lambda code, message: print("Error %d: %s" % (code, message)),
		"Loading": lambda: print("Loading..."),
	}, report=report)
	process(response)
	process(response.copy(cached=True))
	print()

if __name__ == '__main__':
	main()
