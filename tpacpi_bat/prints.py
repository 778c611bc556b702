from os import get_terminal_size
import sys

COLOR = sys.stdout.isatty()
try: terminal_width = min(get_terminal_size(0)[0], 50)
except OSError: terminal_width = 50

def colored(*values:str, color) -> str:
    return f'\x1b[38;5;{color}m{" ".join(values)}\x1b[0m' if COLOR and color else ' '.join(values)

def print_colon(previous_value:str, *next_values:object, color=None) -> None: print(colored(previous_value, color=color)+':', *next_values)

def print_error(*values:object) -> None: print_colon('Error', *values, color=9)

