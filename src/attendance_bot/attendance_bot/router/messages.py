HELP_TEXT = """Welcome to the attendance bot!
[Register] register <your name>
[Clock in/out] "clock in", "clock out" or just "clock"
[Leave] describe it, e.g. "personal leave 2025-07-01~2025-07-03, family matters"
[Off-site] "visiting the site at ..." records where you are today
[Salary] "salary" for last month, "salary 2025-06" for a given month
[Leave history] "my leave"

Admins:
Approve <name> <YYYY-MM-DD> / NeedsDiscussion <name> <YYYY-MM-DD>
AddBonus <name> <YYYY-MM> <amount> <note>
DisasterLeave <YYYY-MM-DD> <note>
export

Send "help" at any time to see this message again."""

REGISTER_FIRST = "Please register first: register <your name>"
ALREADY_REGISTERED = "You are already registered."
REGISTERED = "Registration complete! An admin will review your details.\n" + HELP_TEXT
NO_LEAVE_RECORDS = "No leave records found."
