"""
firattr core: grammar, IR, action handlers and the element compiler.
"""
