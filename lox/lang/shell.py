"""Handles interactive/command-line mode for lox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary lox source."""
        line = self._tmp_line + line + "\n"

        if self.sess.needs_continuation(line):
            self._tmp_line = line
            self.prompt = self.secondary_prompt
            return

        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.run(line)
        self.sess.error_handler.reset()

    def do_ast(self, arg):
        """Prints the syntax tree of arg in parenthesized prefix notation, without running it."""
        with self.sess.error_handler:
            tree = self.sess.ast(arg)
            if tree:
                print(tree, file=self.stdout)
        self.sess.error_handler.reset()

    def do_rpn(self, arg):
        """Prints every expression in arg in reverse Polish notation, without running it."""
        with self.sess.error_handler:
            rpn = self.sess.rpn(arg)
            if rpn:
                print(rpn, file=self.stdout)
        self.sess.error_handler.reset()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lox interpreter!\n\n"
              "Lox is a small dynamically-typed scripting language. This interpreter supports \n"
              "numbers, strings, booleans and nil, variables (var), blocks with lexical scope, \n"
              "if/else, while and for loops, and print.\n\n"
              "Try it out by typing 'var a = 1;'. Next, try typing 'print a + 2;'. \n"
              "Type 'ast <source>' to see how source is parsed, 'rpn <source>' for its arithmetic in \n"
              "reverse Polish notation, and 'exit' to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
