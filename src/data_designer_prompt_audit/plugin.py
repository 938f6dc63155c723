from data_designer.plugins.plugin import Plugin, PluginType

prompt_audit_plugin = Plugin(
    config_qualified_name="data_designer_prompt_audit.config.PromptAuditColumnConfig",
    impl_qualified_name="data_designer_prompt_audit.generator.PromptAuditColumnGenerator",
    plugin_type=PluginType.COLUMN_GENERATOR,
)
