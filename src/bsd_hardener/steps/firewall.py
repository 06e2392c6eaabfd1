"""Packet filter ruleset replacement."""

from bsd_hardener.context import RunContext
from bsd_hardener.probes import file_content_equals
from bsd_hardener.steps.base import Step

PF_RULESET = """\
# Generated by bsd-hardener. Local edits will be replaced.
set skip on lo
set block-policy drop

block return
block in quick inet6 all
pass out quick inet proto tcp to port { 80 443 9001 9030 } keep state
pass out quick inet proto udp to port 53 keep state
pass out quick inet proto udp to port 123 keep state
antispoof quick for egress
"""


class ReplaceFirewall(Step):
    name = "firewall"
    prompt = "Replace the packet filter ruleset with the restrictive default?"

    def is_applied(self, ctx: RunContext) -> bool:
        return file_content_equals(ctx.config.paths.pf_conf, PF_RULESET)

    def apply(self, ctx: RunContext) -> None:
        pf_conf = ctx.config.paths.pf_conf
        ctx.files.replace_file(pf_conf, PF_RULESET, mode=0o600)
        ctx.host.firewall.load(pf_conf)
