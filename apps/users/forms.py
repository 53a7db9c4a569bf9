from django import forms
from django.contrib.auth import password_validation

from .models import User


class UserForm(forms.ModelForm):
    """
    用户表单，仅用于服务层校验数据
    roles 提交的是角色标识(slug)列表，可选项在构造时传入
    """

    password = forms.CharField(required=False, strip=False, widget=forms.PasswordInput)
    password_confirmation = forms.CharField(required=False, strip=False, widget=forms.PasswordInput)
    roles = forms.MultipleChoiceField(required=False, choices=())

    # 更新时密码可以留空，表示不修改
    password_required = False

    class Meta:
        model = User
        fields = ["username", "email", "first_name", "last_name", "phone"]

    def __init__(self, *args, role_choices=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["email"].required = True
        self.fields["roles"].choices = list(role_choices)
        self.fields["password"].required = self.password_required

    def clean_email(self):
        email = self.cleaned_data["email"]
        duplicates = User.objects.filter(email__iexact=email)
        if self.instance.pk:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise forms.ValidationError("A user with that email address already exists.", code="unique")
        return email

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get("password")
        confirmation = cleaned_data.get("password_confirmation")

        if password:
            if password != confirmation:
                self.add_error("password_confirmation", "The password confirmation does not match.")
            else:
                # 用表单里的新值参与相似度校验
                candidate = self.instance
                for field in self._meta.fields:
                    if field in cleaned_data:
                        setattr(candidate, field, cleaned_data[field])
                try:
                    password_validation.validate_password(password, candidate)
                except forms.ValidationError as error:
                    self.add_error("password", error)
        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        password = self.cleaned_data.get("password")
        if password:
            user.set_password(password)
        if commit:
            user.save()
        return user


class UserCreateForm(UserForm):
    password_required = True
