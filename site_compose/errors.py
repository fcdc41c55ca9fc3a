class ScriptError(SystemExit):
    def __init__(self, msg: str, code: int = 1) -> None:
        super().__init__(code)
        self.msg = msg
