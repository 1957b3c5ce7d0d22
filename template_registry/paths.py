"""URL path builders for the two template families.

Job templates are addressed by their full name (``namespace/name``) as a
single path segment. Pipeline templates carry the namespace as its own
segment. Every identifying segment is percent-encoded on its own, so a ``/``
inside a name never splits the path.
"""

from urllib.parse import quote

from .models import DEFAULT_NAMESPACE, TemplateKind, TemplateReference


def encode(segment: str) -> str:
    """Percent-encode a single path segment, including ``/``."""
    return quote(str(segment), safe="")


class TemplatePaths:
    """Builds registry paths, relative to the API base URL, for one template kind."""

    validate: str
    publish: str

    def template(self, ref: TemplateReference) -> str:
        raise NotImplementedError

    def versions(self, ref: TemplateReference) -> str:
        """Path listing the versions of a template, newest first."""
        raise NotImplementedError

    def version(self, ref: TemplateReference, version: str) -> str:
        return f"{self.template(ref)}/versions/{encode(version)}"

    def tag(self, ref: TemplateReference, tag: str) -> str:
        return f"{self.template(ref)}/tags/{encode(tag)}"

    def tag_lookup(self, ref: TemplateReference, tag: str) -> str:
        return f"{self.template(ref)}/{encode(tag)}"


class JobTemplatePaths(TemplatePaths):
    validate = "validator/template"
    publish = "templates"

    def template(self, ref: TemplateReference) -> str:
        return f"templates/{encode(ref.full_name)}"

    def versions(self, ref: TemplateReference) -> str:
        return self.template(ref)


class PipelineTemplatePaths(TemplatePaths):
    validate = "validator/pipelineTemplate"
    publish = "pipelineTemplates"

    def template(self, ref: TemplateReference) -> str:
        namespace = ref.namespace or DEFAULT_NAMESPACE
        return f"pipeline/template/{encode(namespace)}/{encode(ref.name)}"

    def versions(self, ref: TemplateReference) -> str:
        return f"{self.template(ref)}/versions"


_PATHS: dict[TemplateKind, TemplatePaths] = {
    TemplateKind.job: JobTemplatePaths(),
    TemplateKind.pipeline: PipelineTemplatePaths(),
}


def paths_for(kind: TemplateKind | str) -> TemplatePaths:
    """Return the path builder for a template kind."""
    return _PATHS[TemplateKind(kind)]
