"""领域层模型与协议。

包含：
- models: ChatMessage / CompletionResult / ValidationOutcome / ConversionResult 等值对象。
- collaborators: 文本提取、凭证存储、文件下载、剪贴板等外部协作者协议。
- exceptions: 业务异常类型定义。
"""
