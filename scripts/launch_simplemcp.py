import sys
import runpy

# debugpy puts the real arguments after "--"
if "--" in sys.argv:
    args = sys.argv[sys.argv.index("--") + 1 :]
else:
    args = sys.argv[1:]

# give Typer a clean argv
sys.argv = ["simplemcp"] + args

# same as: python -m simplemcp ...
runpy.run_module("simplemcp", run_name="__main__")
