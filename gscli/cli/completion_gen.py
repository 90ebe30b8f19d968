"""
Generate a bash completion script for a command.

The script holds no knowledge of the command's switches: on every TAB it
calls the command back with -complete, so completion stays in sync with
the field descriptors and can look inside the tabular files named on the
command line.
"""

import re


def _function_name(prog: str) -> str:
    """Bash function name for prog, e.g. "gs-chart" -> "_gs_chart_completion"."""
    return f"_{re.sub(r'[^A-Za-z0-9_]', '_', prog)}_completion"


def generate_bash_completion(prog: str) -> str:
    """Generate a bash completion script for prog."""
    func = _function_name(prog)
    lines = [
        f'# Bash completion for {prog}',
        f'# Enable with: source <({prog} -bash-completion)',
        '',
        f'{func}() {{',
        '    local cur="${COMP_WORDS[COMP_CWORD]}"',
        '    local completions',
        '',
        f'    completions=$({prog} -complete $((COMP_CWORD-1)) "${{COMP_WORDS[@]:1}}" 2>/dev/null)',
        '',
        '    local IFS=$\'\\n\'',
        '    COMPREPLY=( $(compgen -W "$completions" -- "$cur") )',
        '',
        '    # Do not add a space after a directory',
        '    if [[ ${#COMPREPLY[@]} -eq 1 && ${COMPREPLY[0]} == */ ]]; then',
        '        compopt -o nospace 2>/dev/null',
        '    fi',
        '}',
        '',
        f'complete -F {func} {prog}',
        '',
    ]

    return '\n'.join(lines)
