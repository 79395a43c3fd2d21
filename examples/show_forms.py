from exprforms import ExpressionError, convert

if __name__ == "__main__":
    test_cases = [
        "(a+3)+var^(b+282*c)",  # the classic example
        "a-b-c",                # left associativity
        "a^b^c",                # right associativity
        "a+b*c",                # precedence
        "(a+b)*c",              # parentheses
        "(a+b",                 # unexpected end of input
        "a$b",                  # invalid character
    ]

    print(f"{'Expression':<22} | {'Fully parenthesized':<26} | {'Postfix':<28} | Prefix")
    print("-" * 110)

    for expr_str in test_cases:
        try:
            forms = convert(expr_str)
            print(f"{expr_str:<22} | {forms.fully_parenthesized:<26} | {forms.postfix:<28} | {forms.prefix}")
        except ExpressionError as e:
            print(f"{expr_str:<22} | Error: {e}")
