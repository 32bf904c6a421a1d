from . import arithmetic, logic, primitives

constants = logic.constants
keywords = logic.keywords
builtins = primitives.builtins

eval_primitive = primitives.eval_primitive
eval_arithmetic = arithmetic.eval_arithmetic
eval_unary = arithmetic.eval_unary

def list_builtins():
    listing = {"constants": sorted(constants)}
    listing.update({k: sorted(v) for k, v in primitives.describe().items()})
    return listing
