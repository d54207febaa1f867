"""Demo models, runnable with ``sketch demo <name>``."""

from sketch_tui.demos.clock import Clock
from sketch_tui.demos.counter import Counter
from sketch_tui.demos.pretty_counter import PrettyCounter
from sketch_tui.demos.text_input import TextInput

DEMOS = {
    "counter": Counter,
    "pretty-counter": PrettyCounter,
    "text-input": TextInput,
    "clock": Clock,
}
